"""API tests for JWTAuthMiddleware.

Tests cover:
- Authorization header format (400)
- Token verification failures (401)
- Key function failures (500)
- Casbin decisions (403 / 200)
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import jwt
import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient
from starlette.requests import Request

from casbin_guard.presentation.middleware import JWTAuthMiddleware
from tests.conftest import MODEL_FILE, SIMPLE_POLICY, TEST_SECRET_KEY


def key_fn(header):
    return TEST_SECRET_KEY


def make_token(claims, key=TEST_SECRET_KEY, headers=None):
    return jwt.encode(claims, key, algorithm="HS256", headers=headers)


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def make_request(headers):
    raw = [(k.lower().encode(), v.encode()) for k, v in headers.items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


@pytest.fixture
def middleware(mock_logger):
    return JWTAuthMiddleware(MODEL_FILE, SIMPLE_POLICY, key_fn, logger=mock_logger)


@pytest.fixture
def client(middleware):
    app = FastAPI()

    @app.get("/book", dependencies=[Depends(middleware.enforce("book", "read"))])
    async def read_book():
        return "success"

    @app.post("/book", dependencies=[Depends(middleware.enforce("book", "write"))])
    async def write_book():
        return "success"

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.api
class TestHeaderFormat:
    """Malformed requests are rejected with 400."""

    def test_missing_header(self, client):
        response = client.get("/book")

        assert response.status_code == 400
        assert response.json()["detail"] == "Incorrect Authorization header format"

    def test_wrong_scheme(self, client):
        response = client.get("/book", headers={"Authorization": "Basic YWxpY2U6"})

        assert response.status_code == 400

    async def test_empty_token(self, middleware):
        dependency = middleware.enforce("book", "read")

        with pytest.raises(HTTPException) as exc_info:
            await dependency(make_request({"Authorization": "Bearer "}))

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Token not found"


@pytest.mark.api
class TestTokenVerification:
    """Bad tokens are rejected with 401."""

    def test_garbage_token(self, client):
        response = client.get("/book", headers=auth_header("not-a-jwt"))

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_wrong_signature(self, client):
        token = make_token({"sub": "alice"}, key="another-secret-key-0123456789-abcdef")

        response = client.get("/book", headers=auth_header(token))

        assert response.status_code == 401

    def test_expired_token(self, client):
        expired = datetime.now(UTC) - timedelta(minutes=5)
        token = make_token({"sub": "alice", "exp": expired})

        response = client.get("/book", headers=auth_header(token))

        assert response.status_code == 401

    def test_token_without_subject(self, client):
        token = make_token({"name": "alice"})

        response = client.get("/book", headers=auth_header(token))

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has no subject"

    def test_key_fn_receives_unverified_header(self, mock_logger):
        seen = []

        def kid_key_fn(header):
            seen.append(header.get("kid"))
            return TEST_SECRET_KEY

        auth = JWTAuthMiddleware(MODEL_FILE, SIMPLE_POLICY, kid_key_fn, logger=mock_logger)
        app = FastAPI()

        @app.get("/book", dependencies=[Depends(auth.enforce("book", "read"))])
        async def read_book():
            return "success"

        token = make_token({"sub": "alice"}, headers={"kid": "key-1"})
        response = TestClient(app).get("/book", headers=auth_header(token))

        assert response.status_code == 200
        assert seen == ["key-1"]


@pytest.mark.api
class TestKeyFunctionFailure:
    """Unexpected errors while handling the token return 500."""

    def test_key_fn_error(self, mock_logger):
        def broken_key_fn(header):
            raise RuntimeError("key store unavailable")

        auth = JWTAuthMiddleware(
            MODEL_FILE, SIMPLE_POLICY, broken_key_fn, logger=mock_logger
        )
        app = FastAPI()

        @app.get("/book", dependencies=[Depends(auth.enforce("book", "read"))])
        async def read_book():
            return "success"

        token = make_token({"sub": "alice"})
        response = TestClient(app, raise_server_exceptions=False).get(
            "/book", headers=auth_header(token)
        )

        assert response.status_code == 500
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args[0] == "jwt_handling_error"


@pytest.mark.api
class TestEnforcement:
    """Casbin decides once the subject is known."""

    def test_allowed(self, client):
        token = make_token({"sub": "alice"})

        response = client.get("/book", headers=auth_header(token))

        assert response.status_code == 200

    def test_denied_action(self, client):
        token = make_token({"sub": "alice"})

        response = client.post("/book", headers=auth_header(token))

        assert response.status_code == 403
        assert response.json()["detail"] == "Permission denied: book:write"

    def test_unknown_subject(self, client):
        token = make_token({"sub": "bob"})

        response = client.get("/book", headers=auth_header(token))

        assert response.status_code == 403

    def test_uses_injected_authorization(self, mock_logger):
        authorization = AsyncMock()
        authorization.check_permission = AsyncMock(return_value=True)
        auth = JWTAuthMiddleware(
            "unused.conf",
            "unused.csv",
            key_fn,
            logger=mock_logger,
            authorization=authorization,
        )
        app = FastAPI()

        @app.delete("/book", dependencies=[Depends(auth.enforce("book", "delete"))])
        async def delete_book():
            return "success"

        token = make_token({"sub": "carol"})
        response = TestClient(app).delete("/book", headers=auth_header(token))

        assert response.status_code == 200
        authorization.check_permission.assert_awaited_once_with(
            "carol", "book", "delete"
        )
