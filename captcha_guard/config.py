from pydantic import BaseModel, Field

from captcha_guard.models import HashMode

# failure tracking configuration
CAPTCHA_THRESHOLD = 5
FAILURE_TTL_SECONDS = None

# request parameter names (set via CLI: python -m captcha_guard.main --username-parameter email)
USERNAME_PARAMETER = "username"
PASSWORD_PARAMETER = "password"
CAPTCHA_RESPONSE_PARAMETER = "captcha_response"

# degraded mode when the captcha provider can't be reached
CONTINUE_ON_VERIFICATION_ERROR = False

# hashing configuration for the bundled user directory
ACTIVE_HASH_MODE = HashMode.SHA256
PEPPER_VALUE = None

# development verifier token
CAPTCHA_TOKEN = "captcha_token"

ATTEMPTS_LOG = "attempts.log"


class GuardConfig(BaseModel):
    threshold: int = Field(default=CAPTCHA_THRESHOLD, ge=0)
    continue_on_verification_error: bool = CONTINUE_ON_VERIFICATION_ERROR
    username_parameter: str | None = USERNAME_PARAMETER
    password_parameter: str = PASSWORD_PARAMETER
    captcha_response_parameter: str = CAPTCHA_RESPONSE_PARAMETER
    failure_ttl_seconds: float | None = Field(default=FAILURE_TTL_SECONDS, gt=0)
