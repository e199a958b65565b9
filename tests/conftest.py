import pytest

from captcha_guard.config import GuardConfig
from captcha_guard.credentials import UserDirectory
from captcha_guard.errors import VerificationTransportError
from captcha_guard.failure_store import FailureStore
from captcha_guard.gate import AttemptGate
from captcha_guard.models import LoginAttempt, VerificationResult


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingVerifier:
    """Verifier double that remembers its calls and answers from a script."""

    def __init__(self, result=None, error=None):
        self.result = result or VerificationResult(success=True)
        self.error = error
        self.calls = []

    def verify(self, token, remote_address):
        self.calls.append((token, remote_address))
        if self.error is not None:
            raise self.error
        return self.result


def rejecting_verifier(*codes):
    return RecordingVerifier(VerificationResult(success=False, error_codes=list(codes)))


def unreachable_verifier():
    return RecordingVerifier(error=VerificationTransportError("connection refused"))


def login(username="alice", password="secret", captcha_response=None, remote_address="10.0.0.1"):
    parameters = {"username": username, "password": password}
    if captcha_response is not None:
        parameters["captcha_response"] = captcha_response
    return LoginAttempt(parameters=parameters, remote_address=remote_address)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return FailureStore()


@pytest.fixture
def users():
    directory = UserDirectory()
    directory.register("alice", "secret")
    directory.register("bob", "hunter2")
    return directory


@pytest.fixture
def verifier():
    return RecordingVerifier()


@pytest.fixture
def make_gate(store, users, verifier):
    def _make(verifier=verifier, **config):
        config.setdefault("threshold", 3)
        return AttemptGate(GuardConfig(**config), store, verifier, users)
    return _make
