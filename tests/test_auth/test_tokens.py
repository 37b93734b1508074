"""Tests for bearer tokens and password hashing."""

import time

import pytest

from bookart.auth.passwords import hash_password, verify_password
from bookart.auth.tokens import InvalidTokenError, issue_token, verify_token

SECRET = "unit-test-secret"


class TestTokens:
    """Tests for issuing and verifying tokens."""

    def test_round_trip_claims(self):
        """Test that verified claims match what was issued."""
        token = issue_token("user-1", "reader@example.com", True, SECRET)
        claims = verify_token(token, SECRET, max_age=60)

        assert claims.user_id == "user-1"
        assert claims.email == "reader@example.com"
        assert claims.is_admin is True

    def test_wrong_secret_rejected(self):
        token = issue_token("user-1", "reader@example.com", False, SECRET)
        with pytest.raises(InvalidTokenError):
            verify_token(token, "another-secret", max_age=60)

    def test_tampered_token_rejected(self):
        token = issue_token("user-1", "reader@example.com", False, SECRET)
        with pytest.raises(InvalidTokenError):
            verify_token(token[:-2] + "xx", SECRET, max_age=60)

    def test_garbage_rejected(self):
        with pytest.raises(InvalidTokenError):
            verify_token("not-a-token", SECRET, max_age=60)

    def test_expired_token_rejected(self):
        """Test that a token older than max_age fails."""
        token = issue_token("user-1", "reader@example.com", False, SECRET)
        time.sleep(1.1)
        with pytest.raises(InvalidTokenError, match="expired"):
            verify_token(token, SECRET, max_age=0)


class TestPasswords:
    """Tests for bcrypt password hashing."""

    def test_hash_verifies(self):
        hashed = hash_password("mellon")
        assert hashed != "mellon"
        assert verify_password("mellon", hashed) is True
        assert verify_password("friend", hashed) is False

    def test_hashes_are_salted(self):
        assert hash_password("mellon") != hash_password("mellon")

    def test_non_bcrypt_hash_is_false(self):
        assert verify_password("mellon", "plain-text") is False
