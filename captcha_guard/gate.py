"""Per-attempt orchestration of captcha checks and failure tracking.

An attempt goes through identity resolution, an optional captcha check
(only once the user's failure count reached the threshold), the credential
check, and finally the success or failure handler. Authentication problems
never leave attempt(); they come back as a FAILURE result. Wiring problems
raise ConfigurationError as soon as they are detected.
"""
import logging

from captcha_guard.config import GuardConfig
from captcha_guard.credentials import CredentialChecker
from captcha_guard.errors import (
    AuthenticationError,
    ConfigurationError,
    MissingParameterError,
    VerificationFailedError,
    VerificationTransportError,
)
from captcha_guard.failure_store import FailureStore
from captcha_guard.handlers import (
    LoginFailuresClearingHandler,
    LoginFailuresCountingHandler,
    make_outcome_handlers,
)
from captcha_guard.models import AttemptResult, AuthResult, ErrorCode, LoginAttempt, LoginParameters
from captcha_guard.policy import FailurePolicy
from captcha_guard.request_parser import AuthenticationRequestParser
from captcha_guard.verifier import CaptchaVerifier

logger = logging.getLogger(__name__)


class AttemptGate:

    def __init__(self, config: GuardConfig, store: FailureStore, verifier: CaptchaVerifier,
                 credential_checker: CredentialChecker):
        if config is None:
            raise ConfigurationError("Missing captcha guard configuration")
        if store is None:
            raise ConfigurationError("Missing login failure store")
        if verifier is None:
            raise ConfigurationError("Missing captcha verifier")
        if credential_checker is None:
            raise ConfigurationError("Missing credential checker")

        self.config = config
        self.store = store
        self.verifier = verifier
        self.credential_checker = credential_checker
        self.policy = FailurePolicy(store, config.threshold)
        self.parser = AuthenticationRequestParser(
            config.username_parameter,
            config.password_parameter,
            config.captcha_response_parameter,
        )
        self.success_handler, self.failure_handler = make_outcome_handlers(store)

    def set_username_parameter(self, username_parameter):
        self.parser = AuthenticationRequestParser(
            username_parameter,
            self.parser.password_parameter,
            self.parser.captcha_response_parameter,
        )

    def set_success_handler(self, handler):
        if not isinstance(handler, LoginFailuresClearingHandler):
            raise ConfigurationError(
                f"Invalid login success handler. Handler must be an instance of "
                f"{LoginFailuresClearingHandler.__name__} but is {handler!r}"
            )
        self._check_store(handler)
        self.success_handler = handler

    def set_failure_handler(self, handler):
        if not isinstance(handler, LoginFailuresCountingHandler):
            raise ConfigurationError(
                f"Invalid login failure handler. Handler must be an instance of "
                f"{LoginFailuresCountingHandler.__name__} but is {handler!r}"
            )
        self._check_store(handler)
        self.failure_handler = handler

    def _check_store(self, handler):
        if handler.store is not self.store:
            raise ConfigurationError("Login handler is bound to a different failure store")

    def is_captcha_required(self, key: str) -> bool:
        return self.policy.is_captcha_required(key)

    def attempt(self, login_attempt: LoginAttempt) -> AttemptResult:
        try:
            params = self.parser.parse(login_attempt)
        except MissingParameterError as e:
            # not the user's fault, nothing to count
            logger.warning("Login attempt rejected: %s", e)
            return AttemptResult(result=AuthResult.FAILURE, error_codes=e.error_codes)

        key = params.username
        try:
            self._authenticate(params, login_attempt.remote_address)
        except AuthenticationError as e:
            self.failure_handler.on_failure(key)
            return AttemptResult(
                result=AuthResult.FAILURE,
                username=key,
                error_codes=e.error_codes,
                captcha_required=self.policy.is_captcha_required(key),
            )

        self.success_handler.on_success(key)
        return AttemptResult(result=AuthResult.SUCCESS, username=key)

    def _authenticate(self, params: LoginParameters, remote_address):
        if self.policy.is_captcha_required(params.username):
            self._verify_captcha(params.captcha_response, remote_address)
        return self.credential_checker.check(params.username, params.password)

    def _verify_captcha(self, captcha_response, remote_address):
        try:
            result = self.verifier.verify(captcha_response, remote_address)
        except VerificationTransportError:
            continue_authentication = self.config.continue_on_verification_error
            logger.error(
                "Captcha validation HTTP error. Continuing user authentication: %s",
                continue_authentication,
                exc_info=True,
            )
            if not continue_authentication:
                raise VerificationFailedError(
                    "Captcha provider unreachable", [ErrorCode.VALIDATION_HTTP_ERROR]
                )
            return
        if not result.success:
            logger.warning("Captcha validation failed: %s", [code.value for code in result.error_codes])
            raise VerificationFailedError("Captcha validation failed", result.error_codes)
