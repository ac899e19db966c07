"""Argon2id password hashing adapter."""

from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError

from newsroom.application.interfaces import PasswordHasher


class Argon2PasswordHasher(PasswordHasher):
    """Implements the PasswordHasher port with argon2-cffi.

    Extra keyword arguments are passed to ``argon2.PasswordHasher`` (e.g.
    ``time_cost`` / ``memory_cost``); stored hashes created with other
    parameters report ``needs_rehash``.
    """

    def __init__(self, **params: int):
        self._hasher = Argon2Hasher(**params)

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except (VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except InvalidHashError:
            return True
