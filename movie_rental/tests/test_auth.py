from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException

from movie_rental.app import models
from movie_rental.app.security import (
    _decode_jwt,
    _load_jwt_key,
    create_access_token,
    generate_password_hash,
    verify_password,
)
from movie_rental.app.services.users import MAX_FAILED_LOGIN_ATTEMPTS


def _registration(**overrides):
    payload = {
        "first_name": "Ana",
        "last_name": "López",
        "email": "Ana.Lopez@Example.com",
        "password": "Str0ng!Pass",
        "confirm_password": "Str0ng!Pass",
    }
    payload.update(overrides)
    return payload


def test_password_hash_round_trip():
    stored = generate_password_hash("Secret1!", iterations=1_000)

    assert verify_password("Secret1!", stored) is True
    assert verify_password("secret1!", stored) is False


def test_access_token_carries_subject_and_role(admin_user):
    payload = _decode_jwt(create_access_token(admin_user), _load_jwt_key())

    assert payload["sub"] == admin_user.id
    assert payload["role"] == "admin"


def test_tampered_token_is_rejected(customer_user):
    token = create_access_token(customer_user)
    header, payload, signature = token.split(".")

    with pytest.raises(HTTPException) as exc_info:
        _decode_jwt(f"{header}.{payload}.{signature[::-1]}", _load_jwt_key())
    assert exc_info.value.status_code == 401


def test_register_customer(client, db_session):
    response = client.post("/auth/register", json=_registration())
    assert response.status_code == 201, response.json()
    data = response.json()
    assert data["email"] == "ana.lopez@example.com"
    assert data["role"] == "customer"
    assert data["full_name"] == "Ana López"

    user = db_session.query(models.User).filter_by(email="ana.lopez@example.com").one()
    assert user.password_hash != "Str0ng!Pass"

    duplicate = client.post("/auth/register", json=_registration(email="ANA.LOPEZ@example.com"))
    assert duplicate.status_code == 409


@pytest.mark.parametrize(
    "overrides",
    [
        {"first_name": "Ana3"},
        {"last_name": "x" * 101},
        {"email": "not-an-email"},
        {"password": "short1!", "confirm_password": "short1!"},
        {"password": "alllower1!", "confirm_password": "alllower1!"},
        {"password": "ALLUPPER1!", "confirm_password": "ALLUPPER1!"},
        {"password": "NoDigits!!", "confirm_password": "NoDigits!!"},
        {"password": "NoSymbol12", "confirm_password": "NoSymbol12"},
        {"confirm_password": "Different1!"},
    ],
)
def test_register_validation(client, overrides):
    response = client.post("/auth/register", json=_registration(**overrides))
    assert response.status_code == 422


def test_login_returns_usable_token(client, customer_user, user_password):
    response = client.post(
        "/auth/token", json={"email": "Customer@Example.com", "password": user_password}
    )
    assert response.status_code == 200
    token = response.json()["access_token"]
    assert response.json()["token_type"] == "bearer"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "customer@example.com"
    assert me.json()["last_login_at"] is not None


def test_login_with_wrong_password(client, customer_user):
    response = client.post(
        "/auth/token", json={"email": "customer@example.com", "password": "wrong"}
    )
    assert response.status_code == 401

    unknown = client.post("/auth/token", json={"email": "nobody@example.com", "password": "x"})
    assert unknown.status_code == 401


def test_account_locks_after_repeated_failures(client, customer_user, db_session, user_password):
    for _ in range(MAX_FAILED_LOGIN_ATTEMPTS - 1):
        response = client.post(
            "/auth/token", json={"email": "customer@example.com", "password": "wrong"}
        )
        assert response.status_code == 401

    locking = client.post(
        "/auth/token", json={"email": "customer@example.com", "password": "wrong"}
    )
    assert locking.status_code == 423

    locked = client.post(
        "/auth/token", json={"email": "customer@example.com", "password": user_password}
    )
    assert locked.status_code == 423

    db_session.refresh(customer_user)
    customer_user.locked_until = datetime.now(timezone.utc) - timedelta(seconds=1)
    db_session.commit()

    unlocked = client.post(
        "/auth/token", json={"email": "customer@example.com", "password": user_password}
    )
    assert unlocked.status_code == 200


def test_invalid_bearer_token(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401
