"""Password hashing.

Stored form: ``pbkdf2_sha256$<iterations>$<salt>$<hash>`` with urlsafe
base64 salt and hash, so the iteration count can be raised later without
invalidating existing accounts.
"""
import base64
import hashlib
import hmac
import secrets

from fittracker.core.config import settings

ALGORITHM = "pbkdf2_sha256"


def _b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def _b64d(s: str) -> bytes:
    return base64.urlsafe_b64decode(s + "=" * (-len(s) % 4))


def hash_password(password: str, iterations: int | None = None) -> str:
    iterations = iterations or settings.password_hash_iterations
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, iterations)
    return f"{ALGORITHM}${iterations}${_b64(salt)}${_b64(digest)}"


def verify_password(password: str, encoded: str) -> bool:
    """Check `password` against a value produced by hash_password()."""
    try:
        algorithm, iterations, salt, expected = encoded.split("$")
        rounds = int(iterations)
    except (AttributeError, ValueError):
        return False
    if algorithm != ALGORITHM:
        return False
    got = hashlib.pbkdf2_hmac("sha256", password.encode(), _b64d(salt), rounds)
    return hmac.compare_digest(got, _b64d(expected))
