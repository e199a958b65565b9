import hmac
from typing import Protocol

from captcha_guard.models import ErrorCode, VerificationResult


class CaptchaVerifier(Protocol):
    def verify(self, token: str | None, remote_address: str) -> VerificationResult:
        """Check a captcha response. Raises VerificationTransportError if the provider is unreachable."""
        ...


class StaticTokenVerifier:
    """Accepts one shared token. For development and tests, not for production."""

    def __init__(self, token: str):
        self.token = token

    def verify(self, token, remote_address):
        if not token:
            return VerificationResult(success=False, error_codes=[ErrorCode.MISSING_CAPTCHA_RESPONSE])
        if not hmac.compare_digest(token.encode(), self.token.encode()):
            return VerificationResult(success=False, error_codes=[ErrorCode.INVALID_CAPTCHA_RESPONSE])
        return VerificationResult(success=True)
