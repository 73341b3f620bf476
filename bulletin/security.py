"""
Password hashing collaborator.

``PasswordHasher`` is injected into ``UserService``; the service never
touches the hashing library directly.  The default configuration is
pwdlib's recommended Argon2 setup.
"""
from pwdlib import PasswordHash


class PasswordHasher:
    def __init__(self, password_hash: PasswordHash | None = None) -> None:
        self._password_hash = password_hash or PasswordHash.recommended()
        self._dummy_hash: str | None = None

    def hash(self, raw_password: str) -> str:
        return self._password_hash.hash(raw_password)

    def verify(self, raw_password: str, hashed_password: str) -> bool:
        return self._password_hash.verify(raw_password, hashed_password)

    def verify_dummy(self, raw_password: str) -> None:
        """
        Verify *raw_password* against a throwaway hash and discard the
        result, so a login for an unknown user costs one verify too.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("unused-dummy-password")
        self.verify(raw_password, self._dummy_hash)
