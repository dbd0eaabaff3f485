"""Tests for registration, activation and token endpoints."""

from httpx import AsyncClient

from tests.conftest import TEST_PASSWORD, AuthUser, RecordingMailer, register_and_activate

REGISTER = "/api/v1/authentication/user"
TOKEN = "/api/v1/authentication/token"


def _register_body(username: str = "alice", email: str = "a@x.com", password: str = TEST_PASSWORD):
    return {"username": username, "email": email, "password": password}


async def test_register_returns_token_and_mails_activation_link(
    client: AsyncClient, mailer: RecordingMailer
) -> None:
    """POST /authentication/user returns 201 with the invitation token."""
    response = await client.post(REGISTER, json=_register_body())
    assert response.status_code == 201
    data = response.json()
    assert data["token"] and data["user_id"]

    assert len(mailer.sent) == 1
    to_email, _, body = mailer.sent[0]
    assert to_email == "a@x.com"
    assert f"/confirm/{data['token']}" in body


async def test_register_duplicate_returns_409(client: AsyncClient) -> None:
    assert (await client.post(REGISTER, json=_register_body())).status_code == 201
    response = await client.post(REGISTER, json=_register_body(email="other@x.com"))
    assert response.status_code == 409
    assert response.json()["error"] == "USER_ALREADY_EXISTS"


async def test_register_when_mail_fails_leaves_no_user(
    client: AsyncClient, mailer: RecordingMailer
) -> None:
    """A failed welcome email removes the user again; the email can be reused."""
    mailer.fail = True
    response = await client.post(REGISTER, json=_register_body())
    assert response.status_code == 502
    assert response.json()["error"] == "MAIL_DELIVERY_ERROR"

    login = await client.post(TOKEN, json={"email": "a@x.com", "password": TEST_PASSWORD})
    assert login.status_code == 401

    mailer.fail = False
    assert (await client.post(REGISTER, json=_register_body())).status_code == 201


async def test_register_invalid_body_returns_422(client: AsyncClient) -> None:
    for body in (
        {},
        _register_body(email="not-an-email"),
        _register_body(password="short"),
        _register_body(username=""),
    ):
        response = await client.post(REGISTER, json=body)
        assert response.status_code == 422, body
        assert response.json()["error"] == "VALIDATION_ERROR"


async def test_login_before_activation_is_rejected(client: AsyncClient) -> None:
    await client.post(REGISTER, json=_register_body())
    response = await client.post(TOKEN, json={"email": "a@x.com", "password": TEST_PASSWORD})
    assert response.status_code == 401


async def test_login_after_activation_returns_bearer_token(client: AsyncClient) -> None:
    user = await register_and_activate(client, "alice", "a@x.com")
    response = await client.get(f"/api/v1/users/{user.user_id}", headers=user.headers)
    assert response.status_code == 200
    assert response.json()["username"] == "alice"
    assert response.json()["is_active"] is True


async def test_login_failures_are_indistinguishable(client: AsyncClient, alice: AuthUser) -> None:
    """Wrong password and unknown email give the same 401 body."""
    wrong_password = await client.post(
        TOKEN, json={"email": "alice@example.com", "password": "wrong-password"}
    )
    unknown_email = await client.post(
        TOKEN, json={"email": "nobody@example.com", "password": TEST_PASSWORD}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["message"] == "Invalid credentials"
    assert wrong_password.json()["details"] == {}


async def test_activation_token_is_single_use(client: AsyncClient) -> None:
    response = await client.post(REGISTER, json=_register_body())
    token = response.json()["token"]
    assert (await client.put(f"/api/v1/users/activate/{token}")).status_code == 204
    assert (await client.put(f"/api/v1/users/activate/{token}")).status_code == 404


async def test_unknown_activation_token_returns_404(client: AsyncClient) -> None:
    assert (await client.put("/api/v1/users/activate/never-issued")).status_code == 404
