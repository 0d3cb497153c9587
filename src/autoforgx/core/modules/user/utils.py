import bcrypt

# bcrypt only uses the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int) -> str:
    pw_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison of a password against a stored bcrypt hash."""
    pw_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except ValueError:
        return False
