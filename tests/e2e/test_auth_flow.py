"""End-to-end tests for the authentication HTTP API."""

import pytest
from fastapi.testclient import TestClient

from jwtauth.interface.api.app import create_app
from tests.di import build_test_container

SIGNUP = {"email": "a@x.com", "password": "secret123", "nickname": "nick"}
CREDENTIALS = {"email": "a@x.com", "password": "secret123"}


@pytest.fixture
def client():
    """Test client over an app wired with in-memory components."""
    app = create_app(build_test_container())
    with TestClient(app) as test_client:
        yield test_client


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestPasswordFlow:
    """Sign-up, login, refresh and logout over HTTP."""

    def test_signup_returns_created_user(self, client):
        # Act
        response = client.post("/auth/signup", json=SIGNUP)

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "a@x.com"
        assert data["nickname"] == "nick"
        assert data["providers"] == ["local"]
        assert "password" not in str(data)

    def test_signup_then_login_then_rotate(self, client):
        """Rotation returns a new refresh token; the old one is then rejected."""
        client.post("/auth/signup", json=SIGNUP)

        t1 = client.post("/auth/login", json=CREDENTIALS)
        assert t1.status_code == 200
        t1 = t1.json()
        assert t1["token_type"] == "Bearer"
        assert t1["access_token"] and t1["refresh_token"]

        t2 = client.post("/auth/refresh", json={"refresh_token": t1["refresh_token"]})
        assert t2.status_code == 200
        assert t2.json()["refresh_token"] != t1["refresh_token"]

        replay = client.post(
            "/auth/refresh", json={"refresh_token": t1["refresh_token"]}
        )
        assert replay.status_code == 401
        assert replay.json()["code"] == "A001"

    def test_logout_then_refresh_fails(self, client):
        client.post("/auth/signup", json=SIGNUP)
        tokens = client.post("/auth/login", json=CREDENTIALS).json()

        logout = client.post("/auth/logout", headers=bearer(tokens["access_token"]))
        assert logout.status_code == 200
        assert logout.json()["success"] is True

        response = client.post(
            "/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert response.status_code == 401
        assert response.json()["code"] == "A001"

    def test_me_returns_current_user(self, client):
        client.post("/auth/signup", json=SIGNUP)
        tokens = client.post("/auth/login", json=CREDENTIALS).json()

        response = client.get("/auth/me", headers=bearer(tokens["access_token"]))

        assert response.status_code == 200
        assert response.json()["email"] == "a@x.com"


class TestErrorResponses:
    """Domain errors render as (status, code, message)."""

    def test_duplicate_email(self, client):
        client.post("/auth/signup", json=SIGNUP)

        response = client.post(
            "/auth/signup", json={**SIGNUP, "nickname": "someone"}
        )

        assert response.status_code == 409
        assert response.json()["code"] == "U002"

    def test_duplicate_nickname(self, client):
        client.post("/auth/signup", json=SIGNUP)

        response = client.post("/auth/signup", json={**SIGNUP, "email": "b@x.com"})

        assert response.status_code == 409
        assert response.json()["code"] == "U003"

    def test_invalid_credentials_do_not_echo_input(self, client):
        client.post("/auth/signup", json=SIGNUP)

        response = client.post(
            "/auth/login", json={"email": "a@x.com", "password": "hunter2-wrong"}
        )

        assert response.status_code == 401
        body = response.json()
        assert body["code"] == "U004"
        assert "hunter2-wrong" not in body["message"]
        assert "a@x.com" not in body["message"]

    def test_unknown_email_matches_wrong_password(self, client):
        client.post("/auth/signup", json=SIGNUP)

        unknown = client.post(
            "/auth/login", json={"email": "z@x.com", "password": "secret123"}
        )
        wrong = client.post(
            "/auth/login", json={"email": "a@x.com", "password": "wrong-pass"}
        )

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    def test_short_password(self, client):
        response = client.post("/auth/signup", json={**SIGNUP, "password": "short"})

        assert response.status_code == 400
        assert response.json()["code"] == "U007"

    def test_bad_email_format(self, client):
        response = client.post("/auth/signup", json={**SIGNUP, "email": "nope"})

        assert response.status_code == 400
        assert response.json()["code"] == "U005"

    def test_missing_field(self, client):
        response = client.post("/auth/signup", json={"email": "a@x.com"})

        assert response.status_code == 400
        assert response.json()["code"] == "C001"

    def test_forged_refresh_token(self, client):
        response = client.post("/auth/refresh", json={"refresh_token": "a.b.c"})

        assert response.status_code == 401
        assert response.json()["code"] == "A001"

    def test_logout_requires_bearer(self, client):
        response = client.post("/auth/logout")

        assert response.status_code == 401
        assert response.json()["code"] == "A001"

    def test_me_rejects_refresh_token(self, client):
        """A refresh token is not accepted as an access token."""
        client.post("/auth/signup", json=SIGNUP)
        tokens = client.post("/auth/login", json=CREDENTIALS).json()

        response = client.get("/auth/me", headers=bearer(tokens["refresh_token"]))

        assert response.status_code == 401


class TestFederatedCallback:
    """Provider callbacks over HTTP."""

    def test_naver_callback_issues_tokens(self, client):
        response = client.post(
            "/auth/callback/naver",
            json={
                "attributes": {
                    "resultcode": "00",
                    "message": "success",
                    "response": {"id": "77", "email": "u@p.com", "name": "U1"},
                }
            },
        )

        assert response.status_code == 200
        tokens = response.json()
        me = client.get("/auth/me", headers=bearer(tokens["access_token"]))
        assert me.json()["email"] == "u@p.com"
        assert me.json()["providers"] == ["naver"]

    def test_two_providers_one_account(self, client):
        client.post(
            "/auth/callback/naver",
            json={"attributes": {"response": {"id": "77", "email": "u@p.com"}}},
        )
        response = client.post(
            "/auth/callback/KAKAO",
            json={
                "attributes": {
                    "id": 5,
                    "kakao_account": {
                        "email": "u@p.com",
                        "profile": {"nickname": "Kim"},
                    },
                }
            },
        )

        tokens = response.json()
        me = client.get("/auth/me", headers=bearer(tokens["access_token"])).json()
        assert sorted(me["providers"]) == ["kakao", "naver"]

    def test_unsupported_provider(self, client):
        response = client.post(
            "/auth/callback/github", json={"attributes": {"sub": "1"}}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "O001"
        assert "github" not in body["message"]

    def test_naver_oidc_callback(self, client):
        response = client.post(
            "/auth/callback/naver/oidc",
            json={"access_token": "naver-access", "id_token_subject": "oidc-sub"},
        )

        assert response.status_code == 200
        tokens = response.json()
        refreshed = client.post(
            "/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert refreshed.status_code == 200

    def test_naver_userinfo_failure_is_503(self, client):
        response = client.post(
            "/auth/callback/naver/oidc",
            json={"access_token": "", "id_token_subject": "oidc-sub"},
        )

        assert response.status_code == 503
        assert response.json()["code"] == "S001"


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["environment"] == "test"

    def test_readiness_reads_session_store(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
