"""Password hashing shared by registration and login."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

PASSWORD_HASHER = PasswordHasher()


def hash_password(password: str) -> str:
    return PASSWORD_HASHER.hash(password)


def verify_password(hashed_password: str, password: str) -> bool:
    try:
        return PASSWORD_HASHER.verify(hashed_password, password)
    except (VerificationError, InvalidHashError):
        return False
