"""Success and failure handlers that keep the failure counters in sync.

Build them with make_outcome_handlers; the gate rejects any other handler.
The optional callback runs after the store has been updated.
"""
import logging

from captcha_guard.failure_store import FailureStore

logger = logging.getLogger(__name__)


class LoginFailuresClearingHandler:

    def __init__(self, store: FailureStore, callback=None):
        self.store = store
        self.callback = callback

    def on_success(self, key: str) -> None:
        self.store.clear(key)
        logger.debug("Cleared login failures for %r", key)
        if self.callback is not None:
            self.callback(key)


class LoginFailuresCountingHandler:

    def __init__(self, store: FailureStore, callback=None):
        self.store = store
        self.callback = callback

    def on_failure(self, key: str) -> int:
        count = self.store.increment(key)
        logger.debug("Login failure %d recorded for %r", count, key)
        if self.callback is not None:
            self.callback(key, count)
        return count


def make_outcome_handlers(store: FailureStore, on_success=None, on_failure=None):
    """Build the (success, failure) handler pair bound to one store."""
    return (
        LoginFailuresClearingHandler(store, on_success),
        LoginFailuresCountingHandler(store, on_failure),
    )
