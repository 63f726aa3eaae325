from unittest import mock

from conftest import sign_in
from storefront.config import Settings, get_settings
from storefront.dependencies import get_identity_client
from storefront.exceptions import IdentityProviderError
from storefront.main import app
from storefront.schemas import IdentityProfile
from storefront.services import check_password, hash_password


def test_sync_creates_user_and_opens_session(client):
    user = sign_in(client, email="Asha@IndoSaga.in")
    assert user["email"] == "asha@indosaga.in"
    assert user["provider"] == "auth0"

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["id"] == user["id"]


def test_sync_reuses_existing_user(client):
    first = sign_in(client)
    second = sign_in(client)
    assert first["id"] == second["id"]


def test_sync_without_email_is_400(client):
    response = client.post("/api/auth/sync", json={"user": {"sub": "auth0|1", "name": "No Mail"}})
    assert response.status_code == 400
    assert response.json()["message"] == "Email is required"


def test_sync_trusts_identity_provider_when_configured(client, settings):
    configured = Settings(**{**settings.__dict__, "auth0_domain": "indosaga.auth0.com"})
    app.dependency_overrides[get_settings] = lambda: configured
    identity = mock.Mock()
    identity.fetch_userinfo.return_value = IdentityProfile(sub="auth0|9", email="verified@indosaga.in", name="Verified")
    app.dependency_overrides[get_identity_client] = lambda: identity

    response = client.post("/api/auth/sync", json={
        "user": {"email": "spoofed@indosaga.in"},
        "accessToken": "token-123",
    })
    assert response.status_code == 200
    assert response.json()["email"] == "verified@indosaga.in"
    identity.fetch_userinfo.assert_called_once_with("token-123")


def test_sync_rejected_token_is_401(client, settings):
    configured = Settings(**{**settings.__dict__, "auth0_domain": "indosaga.auth0.com"})
    app.dependency_overrides[get_settings] = lambda: configured
    identity = mock.Mock()
    identity.fetch_userinfo.side_effect = IdentityProviderError("Invalid access token")
    app.dependency_overrides[get_identity_client] = lambda: identity

    response = client.post("/api/auth/sync", json={"user": {"email": "a@indosaga.in"}, "accessToken": "bad"})
    assert response.status_code == 401
    assert client.get("/api/auth/me").status_code == 401


def test_me_requires_session(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"message": "Authentication required"}


def test_register_login_logout(client):
    registered = client.post("/api/auth/register", json={
        "name": "Meera", "email": "meera@indosaga.in", "password": "teakwood"})
    assert registered.status_code == 200
    assert registered.json()["provider"] == "local"

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401

    bad = client.post("/api/auth/login", json={"email": "meera@indosaga.in", "password": "wrong-one"})
    assert bad.status_code == 401

    good = client.post("/api/auth/login", json={"email": "meera@indosaga.in", "password": "teakwood"})
    assert good.status_code == 200
    assert client.get("/api/auth/me").json()["email"] == "meera@indosaga.in"


def test_register_rules(client):
    short = client.post("/api/auth/register", json={"name": "M", "email": "m@indosaga.in", "password": "12345"})
    assert short.status_code == 400

    client.post("/api/auth/register", json={"name": "M", "email": "m@indosaga.in", "password": "123456"})
    duplicate = client.post("/api/auth/register", json={"name": "M", "email": "m@indosaga.in", "password": "123456"})
    assert duplicate.status_code == 409


def test_identity_provider_account_cannot_password_login(client):
    sign_in(client, email="asha@indosaga.in")
    response = client.post("/api/auth/login", json={"email": "asha@indosaga.in", "password": "anything"})
    assert response.status_code == 401


def test_update_profile(client):
    sign_in(client)
    response = client.put("/api/auth/profile", json={"phone": "9876543210", "address": "12 MG Road, Pune"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["phone"] == "9876543210"
    assert body["user"]["address"] == "12 MG Road, Pune"


def test_profile_email_collision_is_409(client):
    sign_in(client, email="ravi@indosaga.in", name="Ravi")
    sign_in(client, email="asha@indosaga.in")
    response = client.put("/api/auth/profile", json={"email": "ravi@indosaga.in"})
    assert response.status_code == 409


def test_get_logout_redirects_home(client):
    sign_in(client)
    response = client.get("/logout", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == "/"
    assert client.get("/api/auth/me").status_code == 401


def test_password_hashing():
    hashed = hash_password("teakwood")
    assert hashed != "teakwood"
    assert check_password("teakwood", hashed)
    assert not check_password("oakwood", hashed)
    assert not check_password("teakwood", None)
