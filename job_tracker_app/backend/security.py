"""
Password hashing and session token helpers.
"""
import hashlib
import hmac
import secrets

import bcrypt

from .config.settings import get_settings

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str) -> str:
    rounds = get_settings().bcrypt_rounds
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage
        return False


def generate_session_token() -> str:
    """Opaque value handed to the client in the session cookie."""
    return secrets.token_urlsafe(32)


def session_key(token: str) -> str:
    """
    Storage key for a session token.

    The store only ever sees the keyed digest, so the raw cookie value
    cannot be recovered from the sessions table.
    """
    secret = get_settings().session_secret or ""
    return hmac.new(secret.encode("utf-8"), token.encode("utf-8"), hashlib.sha256).hexdigest()
