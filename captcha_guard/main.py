import argparse
import logging
import time
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from captcha_guard.attempt_log import AttemptLog, get_latency
from captcha_guard.config import (
    ACTIVE_HASH_MODE,
    ATTEMPTS_LOG,
    CAPTCHA_THRESHOLD,
    CAPTCHA_TOKEN,
    PEPPER_VALUE,
    USERNAME_PARAMETER,
    GuardConfig,
)
from captcha_guard.credentials import UserDirectory
from captcha_guard.failure_store import FailureStore
from captcha_guard.gate import AttemptGate
from captcha_guard.models import HashMode, LoginAttempt, UserRegister
from captcha_guard.verifier import StaticTokenVerifier


def create_app(config=None, store=None, verifier=None, users=None, attempts_log=ATTEMPTS_LOG):
    if config is None:
        config = GuardConfig()
    if store is None:
        store = FailureStore(ttl_seconds=config.failure_ttl_seconds)
    if verifier is None:
        verifier = StaticTokenVerifier(CAPTCHA_TOKEN)
    users = users if users is not None else UserDirectory(ACTIVE_HASH_MODE, PEPPER_VALUE)
    gate = AttemptGate(config, store, verifier, users)
    log = AttemptLog(attempts_log) if attempts_log else None

    app = FastAPI()
    app.state.gate = gate
    app.state.users = users

    @app.post("/register")
    def register(user_data: UserRegister):
        if not user_data.username or not user_data.password:
            raise HTTPException(status_code=400, detail="Missing username or password")
        if not users.register(user_data.username, user_data.password):
            raise HTTPException(status_code=400, detail="User already exists")
        return {"message": "User registered"}

    @app.post("/login")
    def login(request: Request, payload: dict[str, Any] = Body(...)):
        start_time = time.time()
        remote_address = request.client.host if request.client else ""
        result = gate.attempt(LoginAttempt(parameters=payload, remote_address=remote_address))

        if log is not None:
            log.write(result, get_latency(start_time))

        if result.succeeded:
            return {"message": "Login successful", "username": result.username}

        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={
                "message": "Login failed",
                "error_codes": [code.value for code in result.error_codes],
                "captcha_required": result.captcha_required,
            },
        )

    @app.get("/captcha/required")
    def captcha_required(username: str):
        return {"captcha_required": gate.is_captcha_required(username)}

    return app


def parse_args():
    parser = argparse.ArgumentParser(description="Login server with captcha-gated failure tracking")
    parser.add_argument("--threshold", type=int, default=CAPTCHA_THRESHOLD,
                        help=f"Failed logins before captcha is required (default: {CAPTCHA_THRESHOLD})")
    parser.add_argument("--continue-on-error", action="store_true",
                        help="Skip the captcha check when the captcha provider can't be reached")
    parser.add_argument("--username-parameter", default=USERNAME_PARAMETER,
                        help=f"Request field carrying the username (default: {USERNAME_PARAMETER})")
    parser.add_argument("--failure-ttl", type=float, default=None,
                        help="Forget failures older than this many seconds")
    parser.add_argument("--hash", choices=[m.value.lower() for m in HashMode], default=ACTIVE_HASH_MODE.value.lower(),
                        help="Password hashing for registered users")
    parser.add_argument("--captcha-token", default=CAPTCHA_TOKEN, help="Token accepted by the development verifier")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind (default: 8000)")
    return parser.parse_args()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    args = parse_args()
    config = GuardConfig(
        threshold=args.threshold,
        continue_on_verification_error=args.continue_on_error,
        username_parameter=args.username_parameter,
        failure_ttl_seconds=args.failure_ttl,
    )
    app = create_app(
        config,
        verifier=StaticTokenVerifier(args.captcha_token),
        users=UserDirectory(HashMode(args.hash.upper()), PEPPER_VALUE),
    )

    print(f"[*] Captcha required after {config.threshold} failed login(s)")

    uvicorn.run(app, host=args.host, port=args.port)
