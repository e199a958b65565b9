import pytest

from captcha_guard.credentials import HASHERS, UserDirectory
from captcha_guard.errors import InvalidCredentialsError
from captcha_guard.models import ErrorCode, HashMode


@pytest.mark.parametrize("mode", list(HashMode))
def test_every_mode_has_a_hasher(mode):
    hasher = HASHERS[mode]()
    stored, salt = hasher.hash(b"Summer2024!")
    assert hasher.verify(stored, b"Summer2024!", salt)
    assert not hasher.verify(stored, b"summer2024!", salt)


def test_sha256_salts_differ():
    hasher = HASHERS[HashMode.SHA256]()
    assert hasher.hash(b"secret") != hasher.hash(b"secret")


def test_pepper_must_match():
    peppered = UserDirectory(pepper="SecretPepper")
    peppered.register("alice", "secret")
    assert peppered.check("alice", "secret") == "alice"

    plain = UserDirectory()
    plain._users = peppered._users
    with pytest.raises(InvalidCredentialsError):
        plain.check("alice", "secret")


class TestUserDirectory:
    def test_register_twice(self):
        users = UserDirectory()
        assert users.register("alice", "secret")
        assert not users.register("alice", "other")
        assert "alice" in users

    def test_check_returns_identity(self, users):
        assert users.check("alice", "secret") == "alice"

    def test_wrong_password(self, users):
        with pytest.raises(InvalidCredentialsError) as exc:
            users.check("alice", "nope")
        assert exc.value.error_codes == [ErrorCode.INVALID_CREDENTIALS]

    def test_unknown_user(self, users):
        with pytest.raises(InvalidCredentialsError):
            users.check("mallory", "secret")

    def test_bcrypt_directory(self):
        users = UserDirectory(HashMode.BCRYPT)
        users.register("alice", "secret")
        assert users.check("alice", "secret") == "alice"
