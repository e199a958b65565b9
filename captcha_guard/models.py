from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class HashMode(str, Enum):
    SHA256 = 'SHA256'
    BCRYPT = 'BCRYPT'
    ARGON2 = 'ARGON2'


class AuthResult(str, Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"


class ErrorCode(str, Enum):
    # codes reported by the captcha provider
    MISSING_SECRET_KEY = "missing-input-secret"
    INVALID_SECRET_KEY = "invalid-input-secret"
    MISSING_CAPTCHA_RESPONSE = "missing-input-response"
    INVALID_CAPTCHA_RESPONSE = "invalid-input-response"
    BAD_REQUEST = "bad-request"
    TIMEOUT_OR_DUPLICATE = "timeout-or-duplicate"
    # codes raised locally
    MISSING_USERNAME_REQUEST_PARAMETER = "missing-username-request-parameter"
    VALIDATION_HTTP_ERROR = "validation-http-error"
    INVALID_CREDENTIALS = "invalid-credentials"


class UserRegister(BaseModel):
    username: str
    password: str


class LoginAttempt(BaseModel):
    """Raw login request as handed over by the host: its fields and the caller address."""
    parameters: dict[str, Any] = Field(default_factory=dict)
    remote_address: str = ""


class LoginParameters(BaseModel):
    username: str
    password: str = ""
    captcha_response: str | None = None


class VerificationResult(BaseModel):
    success: bool
    error_codes: list[ErrorCode] = Field(default_factory=list)

    @property
    def failed(self):
        return not self.success


class AttemptResult(BaseModel):
    result: AuthResult
    username: str | None = None
    error_codes: list[ErrorCode] = Field(default_factory=list)
    captcha_required: bool = False

    @property
    def succeeded(self):
        return self.result == AuthResult.SUCCESS
