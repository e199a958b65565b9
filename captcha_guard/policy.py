from captcha_guard.failure_store import FailureStore


class FailurePolicy:

    def __init__(self, store: FailureStore, threshold: int):
        self.store = store
        self.threshold = threshold

    def is_captcha_required(self, key: str) -> bool:
        # must run before the credential check so the current attempt isn't counted
        return self.store.get_count(key) >= self.threshold
