import hashlib
import hmac
import secrets

# Stored as "<hex(hash)>.<hex(salt)>"
_KEY_LENGTH = 64
_SALT_BYTES = 16


def _scrypt(password, salt):
    return hashlib.scrypt(password.encode("utf-8"), salt=salt.encode("utf-8"), n=16384, r=8, p=1,
                          dklen=_KEY_LENGTH)


def hash_password(password: str) -> str:
    salt = secrets.token_hex(_SALT_BYTES)
    return f"{_scrypt(password, salt).hex()}.{salt}"


def verify_password(supplied: str, stored: str) -> bool:
    hashed, _, salt = stored.partition(".")
    if not hashed or not salt:
        return False
    try:
        expected = bytes.fromhex(hashed)
    except ValueError:
        return False
    return hmac.compare_digest(_scrypt(supplied, salt), expected)


def random_password() -> str:
    """A throwaway local password for accounts that only sign in through a provider."""
    return secrets.token_hex(16)
