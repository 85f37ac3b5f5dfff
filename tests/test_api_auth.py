import warnings

from forum.config import settings
from forum.core.exceptions import ForumValidationException

TEST_PASSWORD = "secret123"


def register(client, username="bookworm", email="bookworm@example.com", password="hunter22"):
    return client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": email, "password": password},
    )


def test_register_and_login_with_cookie(client) -> None:
    response = register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "bookworm"
    assert body["role"] == "user"
    assert "password_hash" not in body

    login = client.post(
        "/api/v1/auth/login",
        json={"email": "bookworm@example.com", "password": "hunter22"},
    )
    assert login.status_code == 200
    assert login.json()["token_type"] == "bearer"
    assert settings.SESSION_COOKIE_NAME in login.cookies

    me = client.get("/api/v1/auth/me")
    assert me.status_code == 200
    assert me.json()["email"] == "bookworm@example.com"


def test_bearer_token_is_accepted(client) -> None:
    register(client)
    token = client.post(
        "/api/v1/auth/login",
        json={"email": "bookworm@example.com", "password": "hunter22"},
    ).json()["access_token"]
    client.cookies.clear()

    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_duplicate_registration_lists_fields(client) -> None:
    register(client)

    response = register(client)

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["fields"] == ["email", "username"]


def test_registration_validation(client) -> None:
    assert register(client, username="ab").status_code == 422
    assert register(client, username="bad name!").status_code == 422
    assert register(client, email="no-at-sign.example.com").status_code == 422
    assert register(client, email="a@@b.com").status_code == 422
    assert register(client, email="reader@nodot").status_code == 422
    assert register(client, password="12345").status_code == 422


def test_login_with_bad_credentials(client, make_user) -> None:
    user = make_user()

    wrong_password = client.post(
        "/api/v1/auth/login", json={"email": user.email, "password": "nope-nope"}
    )
    unknown = client.post(
        "/api/v1/auth/login", json={"email": "ghost@example.com", "password": TEST_PASSWORD}
    )

    assert wrong_password.status_code == 401
    assert unknown.status_code == 401


def test_logout_destroys_session(client, make_user) -> None:
    user = make_user()
    client.post("/api/v1/auth/login", json={"email": user.email, "password": TEST_PASSWORD})
    assert client.get("/api/v1/auth/me").status_code == 200

    response = client.post("/api/v1/auth/logout")

    assert response.status_code == 200
    client.cookies.clear()
    assert client.get("/api/v1/auth/me").status_code == 401


def test_logged_out_token_is_rejected(client, make_user, auth_headers) -> None:
    headers = auth_headers(make_user())
    client.post("/api/v1/auth/logout", headers=headers)

    assert client.get("/api/v1/auth/me", headers=headers).status_code == 401


def test_me_requires_login(client) -> None:
    response = client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_garbage_token_is_unauthorized(client) -> None:
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_validation_exception_status_has_no_deprecation_warning() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        exc = ForumValidationException("Email already exists", ["email"])

    assert exc.status_code == 422
    assert exc.detail == {"message": "Email already exists", "fields": ["email"]}
