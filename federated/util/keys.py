"""Random key generation and secret hashing."""

import hashlib
import hmac
import secrets
from base64 import urlsafe_b64encode

import bcrypt

BCRYPT_ROUNDS = 12


def generate_key(kind: str, num_bytes: int = 32) -> str:
    """Generate a random opaque key.

    The random bytes are passed through an HMAC keyed by ``kind`` so keys
    generated for different purposes never share a value space.

    Args:
        kind: What the key is for (e.g. "password")
        num_bytes: Amount of randomness

    Returns:
        URL-safe key string
    """
    digest = hmac.new(
        kind.encode("utf-8"), secrets.token_bytes(num_bytes), hashlib.sha256
    ).digest()
    return urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def hash_secret(secret: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a secret for storage with bcrypt.

    Args:
        secret: Plain secret (at most 72 bytes once UTF-8 encoded)
        rounds: bcrypt cost factor

    Returns:
        bcrypt hash string (``$2b$<rounds>$...``)
    """
    return bcrypt.hashpw(secret.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode(
        "ascii"
    )


def verify_secret(secret: str, hashed: str) -> bool:
    """Check a secret against a value produced by ``hash_secret``."""
    try:
        return bcrypt.checkpw(secret.encode("utf-8"), hashed.encode("ascii"))
    except ValueError:
        # Not a bcrypt hash
        return False
