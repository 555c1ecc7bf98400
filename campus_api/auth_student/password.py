# campus_api/auth_student/password.py
"""
bcrypt password hashes for students.password_hash.
"""
from __future__ import annotations

import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


def hash_password(password: str, *, rounds: int = DEFAULT_ROUNDS) -> str:
    if not password:
        raise ValueError("Password cannot be empty")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """False for a wrong password and for a malformed stored hash."""
    if not password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.warning("[Password] unreadable stored hash: %s", e)
        return False
