"""
NoteShare Backend — Password Hashing
======================================

What:  One-way password digests for stored accounts.
How:   PBKDF2-HMAC-SHA256 with a random 16-byte salt per password.
       Encoded as: pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>

Accounts only ever store the encoded digest; `verify_password` exists for
a future login flow and for tests. There is no session or token layer.
"""

import hashlib
import hmac
import os

PBKDF2_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 120_000
SALT_BYTES = 16


def hash_password(password: str, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Return the encoded salted digest for `password`."""
    salt = os.urandom(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{PBKDF2_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """
    Check `password` against a digest produced by `hash_password`.

    Returns False for malformed or foreign-format digests.
    """
    try:
        algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
        if algorithm != PBKDF2_ALGORITHM:
            return False
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
        rounds = int(iterations)
    except ValueError:
        return False
    candidate = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(candidate, expected)
