"""Password hashing for RentalTrack users."""

from passlib.hash import pbkdf2_sha256 as hasher


def hash_password(password: str) -> str:
    return hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash; malformed hashes never match."""
    try:
        return hasher.verify(password, password_hash)
    except ValueError:
        return False
