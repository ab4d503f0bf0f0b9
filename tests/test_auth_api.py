"""Login, registration and profile endpoints over HTTP."""
from datetime import datetime, timedelta, timezone

import pytest

from citizen_portal.core.crypto import PasswordHasher
from citizen_portal.core.tokens import EMAIL_VERIFICATION_TOKEN, TokenIssuer
from citizen_portal.infrastructure.database.repositories import SqlAccountRepository
from citizen_portal.interfaces.http.deps import get_authentication_service
from citizen_portal.main import app
from citizen_portal.modules.accounts import AuthenticationService

from .fakes import DEFAULT_PASSWORD, FakeAccountRepository, fake

LOGIN_URL = "/api/auth/login"


async def reload(db_session, account_id):
    return await SqlAccountRepository(db_session).get_by_id(account_id)


def registration_payload(**overrides) -> dict:
    payload = {
        "email": fake.unique.email(),
        "password": DEFAULT_PASSWORD,
        "first_name": "Grace",
        "last_name": "Hopper",
        "phone_number": "+2348035550101",
        "date_of_birth": "1990-05-17",
        "address": "12 Marina Road, Lagos",
    }
    payload.update(overrides)
    return payload


class TestLogin:
    async def test_successful_login_returns_token_and_sanitized_profile(self, client, citizen, token_issuer):
        response = await client.post(LOGIN_URL, json={"email": citizen.email, "password": DEFAULT_PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Login successful"
        user = body["data"]["user"]
        assert user["email"] == citizen.email
        assert user["role"] == "citizen"
        assert user["status"] == "active"
        assert "password_hash" not in user
        assert "password" not in user
        assert token_issuer.decode(body["data"]["token"]) == citizen.id

    async def test_one_wrong_password(self, client, db_session, citizen):
        response = await client.post(LOGIN_URL, json={"email": citizen.email, "password": "Wrong!Pass1"})

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "message": "Invalid email or password",
            "code": "INVALID_CREDENTIALS",
        }
        stored = await reload(db_session, citizen.id)
        assert stored.failed_login_attempts == 1
        assert stored.lockout_until is None

    async def test_five_wrong_passwords_lock_the_account(self, client, db_session, citizen):
        for _ in range(5):
            response = await client.post(LOGIN_URL, json={"email": citizen.email, "password": "Wrong!Pass1"})
            assert response.status_code == 401

        stored = await reload(db_session, citizen.id)
        expected = datetime.now(timezone.utc) + timedelta(minutes=15)
        assert stored.failed_login_attempts == 5
        assert stored.lockout_until is not None
        assert abs((stored.lockout_until - expected).total_seconds()) < 60

        response = await client.post(LOGIN_URL, json={"email": citizen.email, "password": DEFAULT_PASSWORD})
        assert response.status_code == 429

    async def test_locked_account_rejects_correct_password(self, client, db_session, account_factory):
        until = datetime.now(timezone.utc) + timedelta(minutes=10)
        account = await account_factory(failed_login_attempts=5, lockout_until=until)

        response = await client.post(LOGIN_URL, json={"email": account.email, "password": DEFAULT_PASSWORD})

        assert response.status_code == 429
        body = response.json()
        assert "Account is locked" in body["message"]
        assert body["code"] == "ACCOUNT_LOCKED"
        assert 0 < int(response.headers["retry-after"]) <= 600
        stored = await reload(db_session, account.id)
        assert stored.failed_login_attempts == 5
        assert abs((stored.lockout_until - until).total_seconds()) < 1

    async def test_expired_lock_allows_correct_password_and_resets(self, client, db_session, account_factory):
        account = await account_factory(
            failed_login_attempts=5,
            lockout_until=datetime.now(timezone.utc) - timedelta(seconds=1),
        )

        response = await client.post(LOGIN_URL, json={"email": account.email, "password": DEFAULT_PASSWORD})

        assert response.status_code == 200
        stored = await reload(db_session, account.id)
        assert stored.failed_login_attempts == 0
        assert stored.lockout_until is None
        assert stored.last_login_at is not None

    async def test_deactivated_account(self, client, db_session, account_factory):
        account = await account_factory(is_active=False, failed_login_attempts=1)

        response = await client.post(LOGIN_URL, json={"email": account.email, "password": "anything"})

        assert response.status_code == 401
        assert response.json()["message"].startswith("Account is deactivated")
        stored = await reload(db_session, account.id)
        assert stored.failed_login_attempts == 1

    async def test_suspended_account(self, client, db_session, account_factory):
        account = await account_factory(status="SUSPENDED")

        response = await client.post(LOGIN_URL, json={"email": account.email, "password": DEFAULT_PASSWORD})

        assert response.status_code == 403
        assert response.json()["message"] == "Account is suspended. Please contact support."
        stored = await reload(db_session, account.id)
        assert stored.failed_login_attempts == 0

    async def test_unknown_email_matches_wrong_password_message(self, client, citizen):
        unknown = await client.post(LOGIN_URL, json={"email": "ghost@example.com", "password": "Wrong!Pass1"})
        wrong = await client.post(LOGIN_URL, json={"email": citizen.email, "password": "Wrong!Pass1"})

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json()["message"] == wrong.json()["message"]

    async def test_email_is_matched_case_insensitively(self, client, citizen):
        response = await client.post(
            LOGIN_URL, json={"email": citizen.email.upper(), "password": DEFAULT_PASSWORD}
        )

        assert response.status_code == 200

    async def test_malformed_body_is_a_validation_error(self, client):
        response = await client.post(LOGIN_URL, json={"email": "not-an-email"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert {error["field"] for error in body["errors"]} >= {"email", "password"}

    async def test_infrastructure_failure_is_a_generic_500(self, client):
        class BrokenRepository(FakeAccountRepository):
            async def get_by_email(self, email):
                raise RuntimeError("database unreachable")

        app.dependency_overrides[get_authentication_service] = lambda: AuthenticationService(
            BrokenRepository(),
            PasswordHasher(rounds=4),
            TokenIssuer(secret="secret"),
        )

        response = await client.post(LOGIN_URL, json={"email": "a@example.com", "password": "x"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Login failed"}
        assert "database unreachable" not in response.text


class TestRegistration:
    async def test_register_creates_account_and_returns_token(self, client, db_session):
        payload = registration_payload(email="New.Citizen@Example.com")

        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        user = body["data"]["user"]
        assert user["email"] == "new.citizen@example.com"
        assert user["role"] == "citizen"
        assert user["failed_login_attempts"] == 0
        assert user["lockout_until"] is None
        assert body["data"]["token"]

    async def test_duplicate_email_is_rejected(self, client, citizen):
        response = await client.post("/api/auth/register", json=registration_payload(email=citizen.email))

        assert response.status_code == 400
        assert response.json()["message"] == "User with this email already exists"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"password": "weakpass"},
            {"first_name": "G"},
            {"last_name": "H0pper"},
            {"phone_number": "12ab"},
            {"date_of_birth": "2999-01-01"},
            {"address": "x" * 256},
            {"role": "overlord"},
        ],
    )
    async def test_invalid_registration_is_rejected(self, client, overrides):
        response = await client.post("/api/auth/register", json=registration_payload(**overrides))

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

    @pytest.mark.parametrize("role", ["admin", "STAFF"])
    async def test_privileged_roles_cannot_self_register(self, client, db_session, role):
        payload = registration_payload(role=role)

        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        messages = [error["message"] for error in response.json()["errors"]]
        assert any("Only citizen accounts can self-register" in message for message in messages)
        assert await SqlAccountRepository(db_session).get_by_email(payload["email"]) is None

    async def test_explicit_citizen_role_is_accepted(self, client):
        response = await client.post("/api/auth/register", json=registration_payload(role="citizen"))

        assert response.status_code == 201
        assert response.json()["data"]["user"]["role"] == "citizen"

    async def test_registered_user_can_log_in(self, client):
        payload = registration_payload()
        await client.post("/api/auth/register", json=payload)

        response = await client.post(LOGIN_URL, json={"email": payload["email"], "password": payload["password"]})

        assert response.status_code == 200


class TestBearerAuthentication:
    async def test_missing_token(self, client):
        response = await client.get("/api/auth/profile")

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_REQUIRED"

    async def test_invalid_token(self, client):
        response = await client.get("/api/auth/profile", headers={"Authorization": "Bearer nonsense"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    async def test_expired_token(self, client, citizen, token_issuer):
        token = TokenIssuer(secret=token_issuer.secret, expires_in="1s").issue(
            citizen.id, now=datetime.now(timezone.utc) - timedelta(minutes=1)
        )

        response = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_EXPIRED"

    async def test_unknown_account(self, client, token_issuer):
        token = token_issuer.issue("00000000-0000-0000-0000-000000000000")

        response = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["code"] == "USER_NOT_FOUND"

    async def test_deactivated_account(self, client, account_factory, auth_headers):
        account = await account_factory(is_active=False)

        response = await client.get("/api/auth/profile", headers=auth_headers(account))

        assert response.status_code == 401
        assert response.json()["code"] == "ACCOUNT_DEACTIVATED"

    async def test_suspended_account(self, client, account_factory, auth_headers):
        account = await account_factory(status="SUSPENDED")

        response = await client.get("/api/auth/profile", headers=auth_headers(account))

        assert response.status_code == 403
        assert response.json()["code"] == "ACCOUNT_SUSPENDED"


class TestProfile:
    async def test_get_profile(self, client, citizen, auth_headers):
        response = await client.get("/api/auth/profile", headers=auth_headers(citizen))

        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == citizen.id

    async def test_update_profile_changes_only_given_fields(self, client, citizen, auth_headers):
        response = await client.put(
            "/api/auth/profile",
            headers=auth_headers(citizen),
            json={"first_name": "Augusta", "address": "1 Broad Street"},
        )

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["first_name"] == "Augusta"
        assert user["last_name"] == "Lovelace"
        assert user["address"] == "1 Broad Street"

    async def test_change_password(self, client, citizen, auth_headers):
        response = await client.put(
            "/api/auth/change-password",
            headers=auth_headers(citizen),
            json={"current_password": DEFAULT_PASSWORD, "new_password": "N3w!Password"},
        )
        assert response.status_code == 200

        old = await client.post(LOGIN_URL, json={"email": citizen.email, "password": DEFAULT_PASSWORD})
        new = await client.post(LOGIN_URL, json={"email": citizen.email, "password": "N3w!Password"})
        assert old.status_code == 401
        assert new.status_code == 200

    async def test_change_password_with_wrong_current_password(self, client, citizen, auth_headers):
        response = await client.put(
            "/api/auth/change-password",
            headers=auth_headers(citizen),
            json={"current_password": "Wrong!Pass1", "new_password": "N3w!Password"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Current password is incorrect"

    async def test_verify_email(self, client, db_session, citizen, token_issuer):
        token = token_issuer.issue(citizen.id, token_type=EMAIL_VERIFICATION_TOKEN)

        response = await client.get(f"/api/auth/verify-email/{token}")

        assert response.status_code == 200
        assert (await reload(db_session, citizen.id)).is_verified is True

    async def test_access_token_cannot_verify_email(self, client, citizen, token_issuer):
        response = await client.get(f"/api/auth/verify-email/{token_issuer.issue(citizen.id)}")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid or expired verification token"

    async def test_logout(self, client):
        response = await client.post("/api/auth/logout")

        assert response.json() == {"success": True, "message": "Logout successful"}


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
