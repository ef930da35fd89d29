"""Tests for modkit.auth.tokens: signed bearer tokens."""

from __future__ import annotations

from itsdangerous import URLSafeTimedSerializer

from modkit.auth import AuthIdentity, create_token, decode_token

SECRET = "unit-test-secret-value"


class TestTokenCreateDecode:
    def test_round_trip(self):
        token = create_token(AuthIdentity(id="u1", collection="users"), SECRET)
        assert decode_token(token, SECRET, 60) == {"id": "u1", "collection": "users"}

    def test_superuser_flag_not_in_token(self):
        token = create_token(
            AuthIdentity(id="root", collection="_superusers", is_superuser=True),
            SECRET,
        )
        assert "is_superuser" not in decode_token(token, SECRET, 60)

    def test_wrong_secret(self):
        token = create_token(AuthIdentity(id="u1", collection="users"), SECRET)
        assert decode_token(token, "another-secret-value", 60) is None

    def test_tampered_token(self):
        token = create_token(AuthIdentity(id="u1", collection="users"), SECRET)
        assert decode_token("x" + token, SECRET, 60) is None

    def test_garbage(self):
        assert decode_token("not-a-token", SECRET, 60) is None

    def test_expired(self):
        token = create_token(AuthIdentity(id="u1", collection="users"), SECRET)
        assert decode_token(token, SECRET, -1) is None

    def test_payload_missing_fields(self):
        serializer = URLSafeTimedSerializer(SECRET, salt="modkit.auth")
        token = serializer.dumps({"id": "u1"})
        assert decode_token(token, SECRET, 60) is None

    def test_other_salt_rejected(self):
        serializer = URLSafeTimedSerializer(SECRET, salt="something.else")
        token = serializer.dumps({"id": "u1", "collection": "users"})
        assert decode_token(token, SECRET, 60) is None
