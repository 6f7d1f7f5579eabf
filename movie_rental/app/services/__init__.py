"""Service layer encapsulating business logic for API routers."""

from .cart import (
    CartItemNotFoundError,
    CartService,
    CartServiceError,
    EmptyCartError,
    MovieAlreadyInCartError,
)
from .credits import (
    CreditNotFoundError,
    CreditService,
    CreditServiceError,
    DuplicateCreditError,
)
from .genres import GenreInUseError, GenreService, GenreServiceError
from .movie_search import SearchCriteria, SortDirection, SortField, build_movie_query
from .movies import DuplicateMovieError, MovieNotFoundError, MovieService, MovieServiceError
from .pagination import Page, PageInfo, paginate, paginate_sequence
from .people import (
    PersonHasCreditsError,
    PersonNotFoundError,
    PersonService,
    PersonServiceError,
)
from .seeding import seed_database
from .users import (
    AccountLockedError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    UserService,
    UserServiceError,
)

__all__ = [
    "AccountLockedError",
    "CartItemNotFoundError",
    "CartService",
    "CartServiceError",
    "CreditNotFoundError",
    "CreditService",
    "CreditServiceError",
    "DuplicateCreditError",
    "DuplicateMovieError",
    "EmailAlreadyRegisteredError",
    "EmptyCartError",
    "GenreInUseError",
    "GenreService",
    "GenreServiceError",
    "InvalidCredentialsError",
    "MovieAlreadyInCartError",
    "MovieNotFoundError",
    "MovieService",
    "MovieServiceError",
    "Page",
    "PageInfo",
    "PersonHasCreditsError",
    "PersonNotFoundError",
    "PersonService",
    "PersonServiceError",
    "SearchCriteria",
    "SortDirection",
    "SortField",
    "UserService",
    "UserServiceError",
    "build_movie_query",
    "paginate",
    "paginate_sequence",
    "seed_database",
]
