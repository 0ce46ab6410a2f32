"""
Password hashing.
"""

import secrets

from werkzeug.security import check_password_hash, generate_password_hash

from core.config import PASSWORD_HASH_METHOD

# Checked against when the username is unknown, so both failures cost one hash
_DUMMY_HASH = generate_password_hash(secrets.token_urlsafe(16), method=PASSWORD_HASH_METHOD)


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt."""
    return generate_password_hash(password, method=PASSWORD_HASH_METHOD)


def verify_password(password: str, stored_hash: str | None) -> bool:
    """
    Check a password against a stored hash.

    A missing hash (unknown user) is verified against a dummy hash and
    always fails. Malformed hashes never verify.
    """
    if stored_hash is None:
        check_password_hash(_DUMMY_HASH, password)
        return False
    try:
        return check_password_hash(stored_hash, password)
    except ValueError:
        return False
