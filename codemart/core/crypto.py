"""Password hashing helpers backed by bcrypt."""

from __future__ import annotations

import bcrypt

_ENCODING = "utf-8"

# bcrypt refuses longer inputs
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(_ENCODING), bcrypt.gensalt()).decode(_ENCODING)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Check ``plain_password`` against a stored hash.

    A missing or malformed hash never verifies. When ``hashed_password`` is
    ``None`` a throwaway hash is still checked so that unknown e-mails cost
    the same as wrong passwords.
    """
    candidate = hashed_password or _DUMMY_HASH
    try:
        matched = bcrypt.checkpw(plain_password.encode(_ENCODING), candidate.encode(_ENCODING))
    except ValueError:
        return False
    return matched and hashed_password is not None


_DUMMY_HASH = hash_password("codemart-dummy-password")

__all__ = ["MAX_PASSWORD_BYTES", "hash_password", "verify_password"]
