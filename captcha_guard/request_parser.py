from captcha_guard.errors import ConfigurationError, MissingParameterError
from captcha_guard.models import LoginAttempt, LoginParameters


def _as_str(value):
    if value is None:
        return None
    return str(value)


class AuthenticationRequestParser:
    """Reads username, password and captcha response out of a login request.

    The username field doubles as the identity key for failure tracking.
    """

    def __init__(self, username_parameter, password_parameter="password",
                 captcha_response_parameter="captcha_response"):
        if not username_parameter:
            raise ConfigurationError("Missing username request parameter name")
        self.username_parameter = username_parameter
        self.password_parameter = password_parameter
        self.captcha_response_parameter = captcha_response_parameter

    def extract_key(self, attempt: LoginAttempt) -> str:
        username = attempt.parameters.get(self.username_parameter)
        if username is None:
            raise MissingParameterError(f"Request has no '{self.username_parameter}' parameter")
        return str(username)

    def parse(self, attempt: LoginAttempt) -> LoginParameters:
        return LoginParameters(
            username=self.extract_key(attempt),
            password=_as_str(attempt.parameters.get(self.password_parameter)) or "",
            captcha_response=_as_str(attempt.parameters.get(self.captcha_response_parameter)),
        )
