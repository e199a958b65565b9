from captcha_guard.models import ErrorCode


class CaptchaGuardError(Exception):
    pass


class ConfigurationError(CaptchaGuardError):
    """Wiring problem detected while assembling the guard. Never raised per request."""


class VerificationTransportError(CaptchaGuardError):
    """The captcha provider could not be reached or answered garbage."""


class AuthenticationError(CaptchaGuardError):
    default_codes = ()

    def __init__(self, message="", error_codes=None):
        super().__init__(message)
        codes = error_codes if error_codes is not None else self.default_codes
        self.error_codes = [ErrorCode(code) for code in codes]


class MissingParameterError(AuthenticationError):
    default_codes = (ErrorCode.MISSING_USERNAME_REQUEST_PARAMETER,)


class VerificationFailedError(AuthenticationError):
    pass


class InvalidCredentialsError(AuthenticationError):
    default_codes = (ErrorCode.INVALID_CREDENTIALS,)
