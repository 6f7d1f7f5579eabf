"""Expose Pydantic schemas for convenient imports."""

from .admin import LogFileInfo, LogsOverview
from .auth import LoginRequest, RegisterRequest, TokenResponse, UserRead
from .cart import CartCount, CartItemCreate, CartItemRead, CartRead, CheckoutSummary
from .common import PagedResponse, PageMeta
from .credits import (
    PREDEFINED_CREW_ROLES,
    AvailableCast,
    CastCreate,
    CastItem,
    CastUpdate,
    CrewCreate,
    CrewItem,
    MovieCredits,
    PersonOption,
)
from .genre import GenreCreate, GenreRead, GenreUpdate
from .movie import (
    CastMember,
    CrewMember,
    GenreOption,
    MovieCreate,
    MovieDetail,
    MovieRead,
    MovieSearchFilters,
    MovieSearchOptions,
    MovieSearchResponse,
    MovieSummary,
    MovieUpdate,
    SelectOption,
)
from .person import (
    ActingRole,
    CrewRole,
    PersonCreate,
    PersonDetail,
    PersonRead,
    PersonSummary,
    PersonUpdate,
)

__all__ = [
    "ActingRole",
    "AvailableCast",
    "CartCount",
    "CartItemCreate",
    "CartItemRead",
    "CartRead",
    "CastCreate",
    "CastItem",
    "CastMember",
    "CastUpdate",
    "CheckoutSummary",
    "CrewCreate",
    "CrewItem",
    "CrewMember",
    "CrewRole",
    "GenreCreate",
    "GenreOption",
    "GenreRead",
    "GenreUpdate",
    "LogFileInfo",
    "LoginRequest",
    "LogsOverview",
    "MovieCreate",
    "MovieCredits",
    "MovieDetail",
    "MovieRead",
    "MovieSearchFilters",
    "MovieSearchOptions",
    "MovieSearchResponse",
    "MovieSummary",
    "MovieUpdate",
    "PREDEFINED_CREW_ROLES",
    "PageMeta",
    "PagedResponse",
    "PersonCreate",
    "PersonDetail",
    "PersonOption",
    "PersonRead",
    "PersonSummary",
    "PersonUpdate",
    "RegisterRequest",
    "SelectOption",
    "TokenResponse",
    "UserRead",
]
