"""bcrypt password hashing.

Passwords are write-only: only the bcrypt hash is stored and the plain
text never leaves the service that receives it.
"""

import bcrypt

DEFAULT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, *, rounds: int = DEFAULT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8")[:MAX_PASSWORD_BYTES], salt).decode("utf-8")
