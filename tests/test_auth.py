"""Tests for authentication endpoints."""

from fastapi import status

API = "/api/v1"
PASSWORD = "Secret123"


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def refresh_with_body(client, refresh_token: str):
    """Present a refresh token in the body only; the cookie jar would take priority."""
    client.cookies.clear()
    response = client.post(f"{API}/users/refresh-token", json={"refresh_token": refresh_token})
    client.cookies.clear()
    return response


class TestRegistration:
    """Test account creation."""

    def test_register_returns_user_and_tokens(self, client):
        response = client.post(f"{API}/users/register", json={
            "fullname": "Alice Example",
            "username": "Alice",
            "email": "Alice@Example.com",
            "password": PASSWORD,
            "avatar": "https://cdn.example.com/a.png",
        })

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["user"]["username"] == "alice"
        assert data["user"]["email"] == "alice@example.com"
        assert "password_hash" not in data["user"]
        assert "refresh_token_hash" not in data["user"]
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["token_type"] == "bearer"

    def test_auth_cookies_are_http_only(self, client, alice):
        response = client.post(f"{API}/users/login", json={"username": "alice", "password": PASSWORD})

        cookies = response.headers.get_list("set-cookie")
        access = next(c for c in cookies if c.startswith("accessToken="))
        refresh = next(c for c in cookies if c.startswith("refreshToken="))
        for cookie in (access, refresh):
            assert "HttpOnly" in cookie
            assert "samesite=none" in cookie.lower()

    def test_register_duplicate_username(self, client, alice):
        payload = {
            "fullname": "Another Alice",
            "username": "alice",
            "email": "other@example.com",
            "password": PASSWORD,
            "avatar": "https://cdn.example.com/a.png",
        }
        response = client.post(f"{API}/users/register", json=payload)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["success"] is False
        assert response.json()["error_code"] == "CONFLICT"

    def test_register_weak_password(self, client):
        response = client.post(f"{API}/users/register", json={
            "fullname": "Weak Password",
            "username": "weak",
            "email": "weak@example.com",
            "password": "alllowercase",
            "avatar": "https://cdn.example.com/a.png",
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_register_missing_fields_is_400(self, client):
        response = client.post(f"{API}/users/register", json={"username": "nobody"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["errors"]


class TestLogin:
    """Test login by email or username."""

    def test_login_with_email(self, client, alice):
        response = client.post(f"{API}/users/login", json={"email": "alice@example.com", "password": PASSWORD})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["id"] == alice["id"]

    def test_login_with_username(self, client, alice):
        response = client.post(f"{API}/users/login", json={"username": "ALICE", "password": PASSWORD})

        assert response.status_code == status.HTTP_200_OK

    def test_wrong_password_and_unknown_user_look_the_same(self, client, alice):
        wrong_password = client.post(f"{API}/users/login", json={"username": "alice", "password": "Wrong1234"})
        unknown_user = client.post(f"{API}/users/login", json={"username": "nobody", "password": PASSWORD})

        assert wrong_password.status_code == status.HTTP_401_UNAUTHORIZED
        assert unknown_user.status_code == status.HTTP_401_UNAUTHORIZED
        assert wrong_password.json()["detail"] == unknown_user.json()["detail"] == "Invalid credentials"

    def test_login_requires_identifier(self, client):
        response = client.post(f"{API}/users/login", json={"password": PASSWORD})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestSessionMiddleware:
    """Test how requests are authenticated."""

    def test_bearer_header(self, client, alice):
        response = client.get(f"{API}/users/current-user", headers=alice["headers"])

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["username"] == "alice"

    def test_cookie_is_accepted(self, client, alice):
        client.post(f"{API}/users/login", json={"username": "alice", "password": PASSWORD})

        response = client.get(f"{API}/users/current-user")

        assert response.status_code == status.HTTP_200_OK

    def test_cookie_takes_priority_over_header(self, client, alice, bob):
        client.post(f"{API}/users/login", json={"username": "alice", "password": PASSWORD})

        response = client.get(f"{API}/users/current-user", headers=bob["headers"])

        assert response.json()["username"] == "alice"

    def test_no_token(self, client):
        response = client.get(f"{API}/users/current-user")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["www-authenticate"] == "Bearer"

    def test_garbage_token_gets_generic_message(self, client):
        response = client.get(f"{API}/users/current-user", headers=bearer("not-a-jwt"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid credential"

    def test_refresh_token_is_not_an_access_token(self, client, alice):
        response = client.get(f"{API}/users/current-user", headers=bearer(alice["refresh_token"]))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid credential"

    def test_expired_access_token_gets_generic_message(self, client, clock, alice):
        clock.shift(minutes=-20)
        login = client.post(f"{API}/users/login", json={"username": "alice", "password": PASSWORD})
        client.cookies.clear()
        clock.reset()

        response = client.get(f"{API}/users/current-user", headers=bearer(login.json()["access_token"]))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid credential"


class TestRefresh:
    """Test refresh token rotation."""

    def test_expired_access_then_refresh_then_retry(self, client, clock, alice):
        # Tokens minted 16 minutes ago: access has expired, refresh has not
        clock.shift(minutes=-16)
        login = client.post(f"{API}/users/login", json={"username": "alice", "password": PASSWORD})
        client.cookies.clear()
        clock.reset()
        tokens = login.json()

        expired = client.get(f"{API}/users/current-user", headers=bearer(tokens["access_token"]))
        assert expired.status_code == status.HTTP_401_UNAUTHORIZED

        refreshed = refresh_with_body(client, tokens["refresh_token"])
        assert refreshed.status_code == status.HTTP_200_OK
        new_tokens = refreshed.json()
        assert new_tokens["refresh_token"] != tokens["refresh_token"]

        retry = client.get(f"{API}/users/current-user", headers=bearer(new_tokens["access_token"]))
        assert retry.status_code == status.HTTP_200_OK

    def test_refresh_from_cookie(self, client, alice):
        client.post(f"{API}/users/login", json={"username": "alice", "password": PASSWORD})

        response = client.post(f"{API}/users/refresh-token")

        assert response.status_code == status.HTTP_200_OK
        assert any(c.startswith("refreshToken=") for c in response.headers.get_list("set-cookie"))

    def test_rotated_refresh_token_is_single_use(self, client, alice):
        first = refresh_with_body(client, alice["refresh_token"])
        assert first.status_code == status.HTTP_200_OK

        replay = refresh_with_body(client, alice["refresh_token"])

        assert replay.status_code == status.HTTP_401_UNAUTHORIZED
        assert replay.json()["detail"] == "Invalid credential"

    def test_missing_refresh_token(self, client):
        client.cookies.clear()
        response = client.post(f"{API}/users/refresh-token")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_access_token_cannot_refresh(self, client, alice):
        response = refresh_with_body(client, alice["access_token"])

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_new_login_stales_previous_session(self, client, alice):
        client.post(f"{API}/users/login", json={"username": "alice", "password": PASSWORD})
        client.cookies.clear()

        response = refresh_with_body(client, alice["refresh_token"])

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestLogout:
    """Test session termination."""

    def test_logout_clears_cookies_and_slot(self, client, alice):
        response = client.post(f"{API}/users/logout", headers=alice["headers"])

        assert response.status_code == status.HTTP_200_OK
        cleared = response.headers.get_list("set-cookie")
        assert any(c.startswith("accessToken=") for c in cleared)
        assert any(c.startswith("refreshToken=") for c in cleared)

        assert refresh_with_body(client, alice["refresh_token"]).status_code == status.HTTP_401_UNAUTHORIZED

    def test_access_token_outlives_logout_until_expiry(self, client, alice):
        client.post(f"{API}/users/logout", headers=alice["headers"])

        response = client.get(f"{API}/users/current-user", headers=alice["headers"])

        assert response.status_code == status.HTTP_200_OK

    def test_logout_twice(self, client, alice):
        client.post(f"{API}/users/logout", headers=alice["headers"])
        response = client.post(f"{API}/users/logout", headers=alice["headers"])

        assert response.status_code == status.HTTP_200_OK


class TestAccount:
    """Test password and profile changes."""

    def test_change_password_keeps_tokens(self, client, alice):
        response = client.post(
            f"{API}/users/change-password",
            json={"old_password": PASSWORD, "new_password": "Changed456"},
            headers=alice["headers"],
        )
        assert response.status_code == status.HTTP_200_OK

        assert client.get(f"{API}/users/current-user", headers=alice["headers"]).status_code == 200
        assert refresh_with_body(client, alice["refresh_token"]).status_code == 200

        old_login = client.post(f"{API}/users/login", json={"username": "alice", "password": PASSWORD})
        new_login = client.post(f"{API}/users/login", json={"username": "alice", "password": "Changed456"})
        assert old_login.status_code == status.HTTP_401_UNAUTHORIZED
        assert new_login.status_code == status.HTTP_200_OK

    def test_change_password_wrong_old_password(self, client, alice):
        response = client.post(
            f"{API}/users/change-password",
            json={"old_password": "Wrong1234", "new_password": "Changed456"},
            headers=alice["headers"],
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Old password is incorrect"

    def test_update_account(self, client, alice):
        response = client.patch(
            f"{API}/users/update-account",
            json={"fullname": "Alice Renamed", "email": "alice.new@example.com"},
            headers=alice["headers"],
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["fullname"] == "Alice Renamed"
        assert response.json()["email"] == "alice.new@example.com"

    def test_update_account_email_taken(self, client, alice, bob):
        response = client.patch(
            f"{API}/users/update-account",
            json={"fullname": "Alice", "email": "bob@example.com"},
            headers=alice["headers"],
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_update_avatar_and_cover(self, client, alice):
        avatar = client.patch(
            f"{API}/users/avatar",
            json={"url": "https://cdn.example.com/new-avatar.png"},
            headers=alice["headers"],
        )
        cover = client.patch(
            f"{API}/users/cover-image",
            json={"url": "https://cdn.example.com/cover.png"},
            headers=alice["headers"],
        )

        assert avatar.json()["avatar"] == "https://cdn.example.com/new-avatar.png"
        assert cover.json()["cover_image"] == "https://cdn.example.com/cover.png"

    def test_channel_profile(self, client, alice, bob):
        client.post(f"{API}/subscriptions/c/{alice['id']}", headers=bob["headers"])

        response = client.get(f"{API}/users/c/alice", headers=bob["headers"])

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["subscribers_count"] == 1
        assert data["channels_subscribed_to_count"] == 0
        assert data["is_subscribed"] is True

    def test_channel_profile_unknown(self, client, alice):
        response = client.get(f"{API}/users/c/nobody", headers=alice["headers"])

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestHealth:
    def test_healthcheck(self, client):
        response = client.get(f"{API}/healthcheck")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert data["database"] == "connected"
