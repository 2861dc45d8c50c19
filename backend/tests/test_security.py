"""
Tests for security.py - password hashing and identity tokens.
"""

import time
from datetime import timedelta

import jwt
import pytest

from jobboard.core.errors import InvalidToken, TokenExpired
from jobboard.core.security import (
    TokenClaims,
    TokenService,
    get_password_hash,
    verify_password,
)
from jobboard.models import Role


class TestPasswordHashing:
    """Test bcrypt hashing round trips."""

    def test_hash_is_not_the_password(self):
        hashed = get_password_hash("hunter2")
        assert hashed != "hunter2"

    def test_verify_accepts_correct_password(self):
        hashed = get_password_hash("hunter2")
        assert verify_password("hunter2", hashed)

    def test_verify_rejects_wrong_password(self):
        hashed = get_password_hash("hunter2")
        assert not verify_password("hunter3", hashed)

    def test_hashes_are_salted(self):
        assert get_password_hash("same") != get_password_hash("same")


class TestTokenService:
    """Test token issuance and verification."""

    @pytest.fixture
    def claims(self) -> TokenClaims:
        return TokenClaims(id="user-1", role=Role.COMPANY, company_id="company-9")

    def test_issue_then_verify_returns_claims(self, tokens, claims):
        token = tokens.issue(claims)
        decoded = tokens.verify(f"Bearer {token}")

        assert decoded.id == "user-1"
        assert decoded.role == Role.COMPANY
        assert decoded.company_id == "company-9"

    def test_payload_nests_identity_under_user(self, tokens, claims):
        token = tokens.issue(claims)
        payload = jwt.decode(token, "test-secret", algorithms=["HS256"])

        assert payload["user"] == {"id": "user-1", "role": "company", "companyId": "company-9"}
        assert "exp" in payload

    def test_null_company_id_round_trips(self, tokens):
        token = tokens.issue(TokenClaims(id="user-2", role=Role.JOBSEEKER))
        assert tokens.decode(token).company_id is None

    def test_default_expiry_is_one_hour(self, tokens, claims):
        before = time.time()
        payload = jwt.decode(tokens.issue(claims), "test-secret", algorithms=["HS256"])
        assert 3590 <= payload["exp"] - before <= 3610

    def test_missing_bearer_prefix_is_invalid_format(self, tokens, claims):
        token = tokens.issue(claims)
        with pytest.raises(InvalidToken) as exc_info:
            tokens.verify(token)
        assert exc_info.value.msg == "Invalid token format"

    def test_wrong_secret_is_rejected(self, claims):
        token = TokenService("other-secret").issue(claims)
        with pytest.raises(InvalidToken) as exc_info:
            TokenService("test-secret").verify(f"Bearer {token}")
        assert exc_info.value.msg == "Token is not valid"

    def test_garbage_token_is_rejected(self, tokens):
        with pytest.raises(InvalidToken):
            tokens.verify("Bearer not.a.token")

    def test_expired_token_raises_expired(self, tokens, claims):
        token = tokens.issue(claims, expires_delta=timedelta(seconds=-5))
        with pytest.raises(TokenExpired) as exc_info:
            tokens.verify(f"Bearer {token}")
        assert exc_info.value.msg == "Token is not valid"
        assert exc_info.value.status_code == 401

    def test_payload_without_user_is_rejected(self, tokens):
        token = jwt.encode({"sub": "someone"}, "test-secret", algorithm="HS256")
        with pytest.raises(InvalidToken):
            tokens.decode(token)

    def test_unknown_role_is_rejected(self, tokens):
        token = jwt.encode(
            {"user": {"id": "u", "role": "admin", "companyId": None}},
            "test-secret",
            algorithm="HS256",
        )
        with pytest.raises(InvalidToken):
            tokens.decode(token)
