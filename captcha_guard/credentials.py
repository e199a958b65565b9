import hashlib
import hmac
import os
import threading
from typing import Protocol

import argon2
import bcrypt

from captcha_guard.errors import InvalidCredentialsError
from captcha_guard.models import HashMode


class CredentialChecker(Protocol):
    def check(self, username: str, password: str) -> str:
        """Return the authenticated identity or raise InvalidCredentialsError."""
        ...


class Sha256Hasher:
    mode = HashMode.SHA256

    def hash(self, secret: bytes):
        salt = os.urandom(16).hex()
        return hashlib.sha256(secret + salt.encode()).hexdigest(), salt

    def verify(self, stored, secret: bytes, salt):
        digest = hashlib.sha256(secret + salt.encode()).hexdigest()
        return hmac.compare_digest(digest, stored)


class BcryptHasher:
    mode = HashMode.BCRYPT

    def __init__(self, rounds=12):
        self.rounds = rounds

    def hash(self, secret: bytes):
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.rounds)).decode(), None

    def verify(self, stored, secret: bytes, salt):
        try:
            return bcrypt.checkpw(secret, stored.encode())
        except ValueError:
            return False


class Argon2Hasher:
    mode = HashMode.ARGON2

    def __init__(self):
        self._hasher = argon2.PasswordHasher(time_cost=1, memory_cost=65536, parallelism=1, type=argon2.Type.ID)

    def hash(self, secret: bytes):
        return self._hasher.hash(secret), None

    def verify(self, stored, secret: bytes, salt):
        try:
            return self._hasher.verify(stored, secret)
        except (argon2.exceptions.VerificationError, argon2.exceptions.InvalidHashError):
            return False


HASHERS = {
    HashMode.SHA256: Sha256Hasher,
    HashMode.BCRYPT: BcryptHasher,
    HashMode.ARGON2: Argon2Hasher,
}


class UserDirectory:
    """In-memory user table used by the bundled login server.

    Passwords are prefixed with the optional pepper before hashing.
    """

    def __init__(self, hash_mode=HashMode.SHA256, pepper=None):
        self.hasher = HASHERS[HashMode(hash_mode)]()
        self.pepper = pepper or ""
        self._lock = threading.Lock()
        self._users = {}

    def _secret(self, password):
        return (self.pepper + password).encode()

    def register(self, username: str, password: str) -> bool:
        """Add a user. Returns False if the username is taken."""
        stored, salt = self.hasher.hash(self._secret(password))
        with self._lock:
            if username in self._users:
                return False
            self._users[username] = (stored, salt)
        return True

    def check(self, username: str, password: str) -> str:
        with self._lock:
            user = self._users.get(username)
        if user is None:
            raise InvalidCredentialsError("Unknown user")
        stored, salt = user
        if not self.hasher.verify(stored, self._secret(password), salt):
            raise InvalidCredentialsError("Bad password")
        return username

    def __contains__(self, username):
        with self._lock:
            return username in self._users
