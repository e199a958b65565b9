import pytest

from captcha_guard.policy import FailurePolicy


@pytest.mark.parametrize("failures, required", [(0, False), (2, False), (3, True), (4, True)])
def test_threshold_boundary(store, failures, required):
    policy = FailurePolicy(store, threshold=3)
    for _ in range(failures):
        store.increment("alice")
    assert policy.is_captcha_required("alice") is required


def test_zero_threshold_always_requires_captcha(store):
    policy = FailurePolicy(store, threshold=0)
    assert policy.is_captcha_required("anyone")


def test_check_has_no_side_effect(store):
    policy = FailurePolicy(store, threshold=1)
    policy.is_captcha_required("alice")
    assert store.get_count("alice") == 0
    assert len(store) == 0
