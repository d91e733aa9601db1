from conduit_api.api.schemas import LoginForm, RegistrationForm
from conduit_api.core.result import Err, Ok
from conduit_api.domain.errors import (
    UserErrorBadAuth,
    UserErrorEmailTaken,
    UserErrorNameTaken,
    UserErrorNotFound,
)
from conduit_api.main import create_app
from fastapi.testclient import TestClient


REGISTRATION = {"user": {"username": "jake", "email": "jake@jake.jake", "password": "jakejake"}}


# ---------------------------------------------------------------------
# Login & registration
# ---------------------------------------------------------------------

def test_login_success(client, services, user):
    services.users.login.return_value = Ok(user)

    resp = client.post("/api/users/login", json={"user": {"email": "jake@jake.jake", "password": "jakejake"}})

    assert resp.status_code == 200
    assert resp.json() == {
        "user": {
            "email": "jake@jake.jake",
            "token": "jwt.token.here",
            "username": "jake",
            "bio": None,
            "image": None,
        }
    }
    services.users.login.assert_awaited_once_with(
        LoginForm(email="jake@jake.jake", password="jakejake")
    )


def test_login_bad_credentials_is_400(client, services):
    services.users.login.return_value = Err(UserErrorBadAuth(email="jake@jake.jake"))

    resp = client.post("/api/users/login", json={"user": {"email": "jake@jake.jake", "password": "wrongpass"}})

    assert resp.status_code == 400
    assert resp.json() == {"errors": {"code": "user_bad_auth", "email": "jake@jake.jake"}}


def test_login_invalid_email_is_422(client, services):
    resp = client.post("/api/users/login", json={"user": {"email": "not-an-email", "password": "jakejake"}})

    assert resp.status_code == 422
    assert resp.json() == {"errors": {"email": ["Not a valid email"]}}
    services.users.login.assert_not_awaited()


def test_register_success(client, services, user):
    services.users.register.return_value = Ok(user)

    resp = client.post("/api/users", json=REGISTRATION)

    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "jake"
    services.users.register.assert_awaited_once_with(
        RegistrationForm(username="jake", email="jake@jake.jake", password="jakejake")
    )


def test_register_reports_every_invalid_field(client, services):
    resp = client.post("/api/users", json={"user": {"username": "ab", "email": "bad", "password": "x"}})

    assert resp.status_code == 422
    assert resp.json() == {
        "errors": {
            "username": ["Minimum length is 3"],
            "email": ["Not a valid email"],
            "password": ["Minimum length is 5"],
        }
    }
    services.users.register.assert_not_awaited()


def test_register_short_username_only(client):
    body = {"user": {"username": "ab", "email": "jake@jake.jake", "password": "jakejake"}}

    resp = client.post("/api/users", json=body)

    assert resp.status_code == 422
    assert resp.json() == {"errors": {"username": ["Minimum length is 3"]}}


def test_register_malformed_json_short_circuits(client, services):
    resp = client.post(
        "/api/users",
        content=b'{"user": {"username": ',
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 422
    assert resp.json() == {"errors": "Malformed JSON payload"}
    services.users.register.assert_not_awaited()


def test_register_deeply_nested_json_is_malformed(client, services):
    resp = client.post(
        "/api/users",
        content=b"[" * 100_000 + b"]" * 100_000,
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 422
    assert resp.json() == {"errors": "Malformed JSON payload"}
    services.users.register.assert_not_awaited()


def test_register_taken_username_and_email(client, services):
    services.users.register.return_value = Err(UserErrorNameTaken(username="jake"))
    assert client.post("/api/users", json=REGISTRATION).status_code == 400

    services.users.register.return_value = Err(UserErrorEmailTaken(email="jake@jake.jake"))
    resp = client.post("/api/users", json=REGISTRATION)

    assert resp.status_code == 400
    assert resp.json()["errors"]["code"] == "user_email_taken"


# ---------------------------------------------------------------------
# Current user
# ---------------------------------------------------------------------

def test_get_user_without_header_is_401(client, services):
    resp = client.get("/api/user")

    assert resp.status_code == 401
    assert resp.json() == {"errors": {"code": "token_not_found"}}
    services.users.get_user.assert_not_awaited()


def test_get_user_with_unresolvable_token_is_401(client, services):
    resp = client.get("/api/user", headers={"Authorization": "Token garbage"})

    assert resp.status_code == 401
    assert resp.json()["errors"]["code"] == "token_malformed"
    services.users.get_user.assert_not_awaited()


def test_get_user_passes_resolved_identity(client, services, user, auth_headers):
    services.users.get_user.return_value = Ok(user)

    resp = client.get("/api/user", headers=auth_headers)

    assert resp.status_code == 200
    current = services.users.get_user.await_args.args[0]
    assert current.user_id == 1
    assert current.token == auth_headers["Authorization"][len("Token "):]


def test_get_user_not_found_is_404(client, services, auth_headers):
    services.users.get_user.return_value = Err(UserErrorNotFound(username="jake"))

    resp = client.get("/api/user", headers=auth_headers)

    assert resp.status_code == 404


def test_update_user_partial_payload(client, services, user, auth_headers):
    services.users.update_user.return_value = Ok(user)

    resp = client.put("/api/user", json={"user": {"bio": "I like to skateboard"}}, headers=auth_headers)

    assert resp.status_code == 200
    form = services.users.update_user.await_args.args[1]
    assert form.bio == "I like to skateboard"
    assert form.email is None


def test_update_user_validates_present_fields(client, services, auth_headers):
    resp = client.put("/api/user", json={"user": {"password": "abc"}}, headers=auth_headers)

    assert resp.status_code == 422
    assert resp.json() == {"errors": {"password": ["Minimum length is 5"]}}
    services.users.update_user.assert_not_awaited()


def test_update_user_authenticates_before_reading_body(client, services):
    resp = client.put(
        "/api/user",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 401


def test_update_user_malformed_json(client, auth_headers):
    resp = client.put(
        "/api/user",
        content=b"not json",
        headers={"Content-Type": "application/json", **auth_headers},
    )

    assert resp.status_code == 422
    assert resp.json() == {"errors": "Malformed JSON payload"}


# ---------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------

def test_profile_anonymous(client, services, profile):
    services.users.get_profile.return_value = Ok(profile)

    resp = client.get("/api/profiles/jake")

    assert resp.status_code == 200
    assert resp.json() == {
        "profile": {"username": "jake", "bio": "I work at statefarm", "image": None, "following": False}
    }
    services.users.get_profile.assert_awaited_once_with(None, "jake")


def test_profile_with_bad_token_is_anonymous(client, services, profile):
    services.users.get_profile.return_value = Ok(profile)

    resp = client.get("/api/profiles/jake", headers={"Authorization": "Token garbage"})

    assert resp.status_code == 200
    services.users.get_profile.assert_awaited_once_with(None, "jake")


def test_profile_with_valid_token_sees_viewer(client, services, profile, auth_headers):
    services.users.get_profile.return_value = Ok(profile)

    client.get("/api/profiles/jake", headers=auth_headers)

    current, username = services.users.get_profile.await_args.args
    assert current.user_id == 1
    assert username == "jake"


def test_follow_requires_auth(client, services):
    assert client.post("/api/profiles/jake/follow").status_code == 401
    assert client.delete("/api/profiles/jake/follow").status_code == 401
    services.users.follow_user.assert_not_awaited()
    services.users.unfollow_user.assert_not_awaited()


def test_follow_and_unfollow(client, services, profile, auth_headers):
    followed = profile.model_copy(update={"following": True})
    services.users.follow_user.return_value = Ok(followed)
    services.users.unfollow_user.return_value = Ok(profile)

    resp = client.post("/api/profiles/jake/follow", headers=auth_headers)
    assert resp.json()["profile"]["following"] is True

    resp = client.delete("/api/profiles/jake/follow", headers=auth_headers)
    assert resp.json()["profile"]["following"] is False


def test_follow_unknown_user_is_404(client, services, auth_headers):
    services.users.follow_user.return_value = Err(UserErrorNotFound(username="ghost"))

    resp = client.post("/api/profiles/ghost/follow", headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json() == {"errors": {"code": "user_not_found", "username": "ghost"}}


# ---------------------------------------------------------------------
# Token scheme
# ---------------------------------------------------------------------

def test_strict_scheme_rejects_bearer_header(services, auth_headers, make_settings):
    strict = make_settings(strict_token_scheme=True)
    token = auth_headers["Authorization"][len("Token "):]

    with TestClient(create_app(services=services, app_settings=strict)) as client:
        resp = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.json()["errors"]["code"] == "token_malformed"
    services.users.get_user.assert_not_awaited()
