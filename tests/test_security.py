"""Unit tests for youth_cms.core.security: password hashing and the session token codec."""

import base64
import hashlib
import json
import unittest
from unittest.mock import patch

import jwt

from youth_cms.core.security import (
    LEGACY_DIGEST_PREFIX,
    hash_password,
    issue_token,
    needs_rehash,
    verify_password,
    verify_token,
)
from youth_cms.models.user import UserRole
from youth_cms.schemas.auth import SessionPrincipal

SECRET = "unit-test-secret-0123456789abcdef0123"
OTHER_SECRET = "another-secret-0123456789abcdef012345"
NOW = 1_767_225_600  # 2026-01-01T00:00:00Z


def _principal(**kwargs: object) -> SessionPrincipal:
    """Build an admin principal for branch 7 unless overridden."""
    defaults = {
        "sub": 42,
        "username": "damascus-admin",
        "role": UserRole.ADMIN,
        "branch_id": 7,
    }
    defaults.update(kwargs)
    return SessionPrincipal(**defaults)


def _b64url_decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


class TestPasswordHashing(unittest.TestCase):
    """hash_password / verify_password keep the verify contract for any password."""

    def setUp(self) -> None:
        patcher = patch("youth_cms.core.security.BCRYPT_ROUNDS", 4)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_verify_accepts_original_password(self) -> None:
        for plain in ("admin123", "x", "كلمة-سر-عربية", " spaced out "):
            with self.subTest(plain=plain):
                self.assertTrue(verify_password(plain, hash_password(plain)))

    def test_verify_rejects_different_password(self) -> None:
        self.assertFalse(verify_password("admin123", hash_password("admin123x")))

    def test_long_passwords_differ_past_bcrypt_limit(self) -> None:
        plain = "p" * 100
        self.assertFalse(verify_password(plain, hash_password(plain + "x")))
        self.assertTrue(verify_password(plain, hash_password(plain)))

    def test_hashes_are_salted(self) -> None:
        self.assertNotEqual(hash_password("admin123"), hash_password("admin123"))

    def test_malformed_stored_hash_is_rejected(self) -> None:
        self.assertFalse(verify_password("admin123", "not-a-hash"))
        self.assertFalse(verify_password("admin123", ""))

    def test_legacy_digest_verifies_and_needs_rehash(self) -> None:
        legacy = hashlib.sha256(f"{LEGACY_DIGEST_PREFIX}admin123".encode()).hexdigest()
        self.assertTrue(verify_password("admin123", legacy))
        self.assertFalse(verify_password("admin1234", legacy))
        self.assertTrue(needs_rehash(legacy))
        self.assertFalse(needs_rehash(hash_password("admin123")))


class TestIssueToken(unittest.TestCase):
    """issue_token produces the documented three-part wire format."""

    def test_wire_format(self) -> None:
        token = issue_token(_principal(), SECRET, 3600, now=NOW)
        parts = token.split(".")
        self.assertEqual(len(parts), 3)
        for part in parts:
            self.assertTrue(part)
            self.assertNotIn("=", part)
            self.assertNotIn("+", part)
            self.assertNotIn("/", part)
        self.assertEqual(
            json.loads(_b64url_decode(parts[0])),
            {"alg": "HS256", "typ": "JWT"},
        )
        self.assertEqual(
            json.loads(_b64url_decode(parts[1])),
            {
                "sub": 42,
                "username": "damascus-admin",
                "role": "admin",
                "branchId": 7,
                "exp": NOW + 3600,
            },
        )

    def test_default_ttl_is_eight_hours(self) -> None:
        token = issue_token(_principal(), SECRET, now=NOW)
        claims = verify_token(token, SECRET, now=NOW)
        self.assertIsNotNone(claims)
        self.assertEqual(claims.exp, NOW + 28800)

    def test_deterministic_for_same_clock(self) -> None:
        self.assertEqual(
            issue_token(_principal(), SECRET, 60, now=NOW),
            issue_token(_principal(), SECRET, 60, now=NOW),
        )

    def test_later_issue_changes_only_body_and_signature(self) -> None:
        first = issue_token(_principal(), SECRET, 60, now=NOW).split(".")
        second = issue_token(_principal(), SECRET, 60, now=NOW + 5).split(".")
        self.assertEqual(first[0], second[0])
        self.assertNotEqual(first[1], second[1])
        self.assertNotEqual(first[2], second[2])

    def test_superadmin_has_null_branch(self) -> None:
        principal = _principal(sub=1, username="superadmin", role=UserRole.SUPERADMIN, branch_id=None)
        token = issue_token(principal, SECRET, 60, now=NOW)
        body = json.loads(_b64url_decode(token.split(".")[1]))
        self.assertIn("branchId", body)
        self.assertIsNone(body["branchId"])


class TestVerifyToken(unittest.TestCase):
    """verify_token returns claims only for authentic, unexpired, well-formed tokens."""

    def test_round_trip(self) -> None:
        principal = _principal()
        claims = verify_token(issue_token(principal, SECRET, 600, now=NOW), SECRET, now=NOW + 10)
        self.assertIsNotNone(claims)
        self.assertEqual(claims.principal(), principal)
        self.assertEqual(claims.exp, NOW + 600)

    def test_wrong_secret_rejected(self) -> None:
        token = issue_token(_principal(), SECRET, 600, now=NOW)
        self.assertIsNone(verify_token(token, OTHER_SECRET, now=NOW))

    def test_altered_claims_rejected(self) -> None:
        header, body, signature = issue_token(_principal(), SECRET, 600, now=NOW).split(".")
        claims = json.loads(_b64url_decode(body))
        claims["role"] = "superadmin"
        claims["branchId"] = None
        forged_body = _b64url_encode(json.dumps(claims, separators=(",", ":")).encode())
        self.assertIsNone(verify_token(f"{header}.{forged_body}.{signature}", SECRET, now=NOW))

    def test_negative_ttl_is_expired(self) -> None:
        token = issue_token(_principal(), SECRET, -1, now=NOW)
        self.assertIsNone(verify_token(token, SECRET, now=NOW))

    def test_expiry_boundary(self) -> None:
        token = issue_token(_principal(), SECRET, 60, now=NOW)
        self.assertIsNotNone(verify_token(token, SECRET, now=NOW + 60))
        self.assertIsNone(verify_token(token, SECRET, now=NOW + 61))

    def test_malformed_strings_rejected(self) -> None:
        for token in ("", "abc", "a.b", "a.b.c.d", "a..c", ".b.c", "a.b.", "!!!.###.$$$", "...."):
            with self.subTest(token=token):
                self.assertIsNone(verify_token(token, SECRET, now=NOW))

    def test_signed_non_json_body_rejected(self) -> None:
        token = jwt.PyJWS().encode(b"not json at all", SECRET, algorithm="HS256")
        self.assertIsNone(verify_token(token, SECRET, now=NOW))

    def test_signed_body_with_unexpected_field_rejected(self) -> None:
        body = {
            "sub": 42,
            "username": "damascus-admin",
            "role": "admin",
            "branchId": 7,
            "exp": NOW + 600,
            "isRoot": True,
        }
        token = jwt.PyJWS().encode(json.dumps(body).encode(), SECRET, algorithm="HS256")
        self.assertIsNone(verify_token(token, SECRET, now=NOW))

    def test_signed_body_missing_branch_rejected(self) -> None:
        body = {"sub": 42, "username": "damascus-admin", "role": "admin", "exp": NOW + 600}
        token = jwt.PyJWS().encode(json.dumps(body).encode(), SECRET, algorithm="HS256")
        self.assertIsNone(verify_token(token, SECRET, now=NOW))

    def test_signed_body_with_string_subject_rejected(self) -> None:
        body = {
            "sub": "42",
            "username": "damascus-admin",
            "role": "admin",
            "branchId": 7,
            "exp": NOW + 600,
        }
        token = jwt.PyJWS().encode(json.dumps(body).encode(), SECRET, algorithm="HS256")
        self.assertIsNone(verify_token(token, SECRET, now=NOW))

    def test_unknown_role_rejected(self) -> None:
        body = {
            "sub": 42,
            "username": "damascus-admin",
            "role": "owner",
            "branchId": 7,
            "exp": NOW + 600,
        }
        token = jwt.PyJWS().encode(json.dumps(body).encode(), SECRET, algorithm="HS256")
        self.assertIsNone(verify_token(token, SECRET, now=NOW))

    def test_unsigned_alg_none_rejected(self) -> None:
        _, body, _ = issue_token(_principal(), SECRET, 600, now=NOW).split(".")
        header = _b64url_encode(b'{"alg":"none","typ":"JWT"}')
        self.assertIsNone(verify_token(f"{header}.{body}.AAAA", SECRET, now=NOW))


if __name__ == "__main__":
    unittest.main()
