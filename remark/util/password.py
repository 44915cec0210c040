"""Password hashing utilities.

bcrypt only looks at the first 72 bytes of its input (and bcrypt 5 refuses
longer input), while passwords may be up to 100 characters. Passwords are
therefore reduced to a base64 SHA-256 digest (44 bytes) before bcrypt.
"""

import base64
import hashlib

import bcrypt

# Work factor used for every new hash
BCRYPT_ROUNDS = 10

BCRYPT_MAX_BYTES = 72


def _digest(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password with a fresh salt.

    Args:
        password: Plain-text password
        rounds: bcrypt cost factor

    Returns:
        bcrypt hash as text ("$2b$10$...")
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_digest(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash.

    Older hashes are of the raw password, so a short password is also
    checked as-is. Malformed hashes count as a mismatch.
    """
    stored = password_hash.encode("utf-8")
    try:
        if bcrypt.checkpw(_digest(password), stored):
            return True
        raw = password.encode("utf-8")
        return len(raw) <= BCRYPT_MAX_BYTES and bcrypt.checkpw(raw, stored)
    except ValueError:
        return False
