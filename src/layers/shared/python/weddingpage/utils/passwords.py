"""Password hashing for guestbook comments."""

import os

import bcrypt

DEFAULT_ROUNDS = 12


def _rounds() -> int:
    return int(os.environ.get("BCRYPT_ROUNDS", DEFAULT_ROUNDS))


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=_rounds())
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False
