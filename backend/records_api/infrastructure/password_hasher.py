"""Credential Hasher — salted PBKDF2-HMAC-SHA256 with a fixed work factor.

Invariants:
    - hash() output: pbkdf2_sha256$<iterations>$<salt_b64>$<digest_b64>
    - verify() uses the iteration count stored in the hash, compares in constant time
    - Plaintext and hashed values are never logged
    - Malformed stored hashes raise CredentialHashError (not a silent mismatch)

Design Decisions:
    - Async wrappers run the KDF in the threadpool so the event loop keeps serving
"""

import base64
import hashlib
import hmac
import secrets

from starlette.concurrency import run_in_threadpool

from records_api.core.errors import CredentialHashError

ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16


def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii").rstrip("=")


def _b64decode(text: str) -> bytes:
    return base64.b64decode(text + "=" * (-len(text) % 4))


class PasswordHasher:
    """One-way password hashing and verification."""

    def __init__(self, iterations: int = 600_000):
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self.iterations = iterations

    def hash(self, plaintext: str) -> str:
        try:
            salt = secrets.token_bytes(SALT_BYTES)
            digest = hashlib.pbkdf2_hmac(
                "sha256", plaintext.encode("utf-8"), salt, self.iterations,
            )
        except (TypeError, ValueError, UnicodeError) as e:
            raise CredentialHashError() from e
        return f"{ALGORITHM}${self.iterations}${_b64encode(salt)}${_b64encode(digest)}"

    def verify(self, plaintext: str, hashed: str) -> bool:
        try:
            algorithm, iterations, salt, expected = hashed.split("$")
            if algorithm != ALGORITHM:
                raise ValueError(algorithm)
            digest = hashlib.pbkdf2_hmac(
                "sha256", plaintext.encode("utf-8"),
                _b64decode(salt), int(iterations),
            )
            return hmac.compare_digest(digest, _b64decode(expected))
        except (AttributeError, TypeError, ValueError, UnicodeError) as e:
            raise CredentialHashError("stored credential is unreadable") from e

    async def hash_async(self, plaintext: str) -> str:
        return await run_in_threadpool(self.hash, plaintext)

    async def verify_async(self, plaintext: str, hashed: str) -> bool:
        return await run_in_threadpool(self.verify, plaintext, hashed)
