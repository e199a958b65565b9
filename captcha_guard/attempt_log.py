import json
import threading
import time

from captcha_guard.models import AttemptResult


class AttemptLog:
    """Appends one JSON line per login attempt."""

    def __init__(self, path):
        self.path = path
        self._lock = threading.Lock()

    def write(self, attempt: AttemptResult, latency):
        entry = {
            "timestamp": time.time(),
            "username": attempt.username,
            "result": attempt.result.value,
            "error_codes": [code.value for code in attempt.error_codes],
            "captcha_required": attempt.captcha_required,
            "latency_ms": latency,
        }
        with self._lock:
            with open(self.path, "a") as f:
                f.write(json.dumps(entry) + "\n")


def get_latency(start_time):
    return (time.time() - start_time) * 1000
