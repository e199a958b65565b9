from captcha_guard.config import GuardConfig
from captcha_guard.errors import (
    AuthenticationError,
    CaptchaGuardError,
    ConfigurationError,
    InvalidCredentialsError,
    MissingParameterError,
    VerificationFailedError,
    VerificationTransportError,
)
from captcha_guard.failure_store import FailureStore
from captcha_guard.gate import AttemptGate
from captcha_guard.handlers import make_outcome_handlers
from captcha_guard.models import AttemptResult, AuthResult, ErrorCode, LoginAttempt, VerificationResult
from captcha_guard.policy import FailurePolicy
