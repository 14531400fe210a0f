import pytest

from image_server.backend.app.infrastructure.security.rate_limiter import FixedWindowRateLimiter


def test_allows_up_to_max_requests():
    limiter = FixedWindowRateLimiter(max_requests=3, window_seconds=60)

    assert [limiter.allow("1.2.3.4") for _ in range(4)] == [True, True, True, False]


def test_keys_are_independent():
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60)

    assert limiter.allow("a") is True
    assert limiter.allow("b") is True
    assert limiter.allow("a") is False


def test_limiters_do_not_share_memory_storage():
    first = FixedWindowRateLimiter(max_requests=1, window_seconds=60)
    second = FixedWindowRateLimiter(max_requests=1, window_seconds=60)

    assert first.allow("a") is True
    assert second.allow("a") is True


def test_decision_reports_remaining_and_reset():
    limiter = FixedWindowRateLimiter(max_requests=2, window_seconds=60)

    first = limiter.hit("a")
    second = limiter.hit("a")
    third = limiter.hit("a")

    assert (first.remaining, second.remaining, third.remaining) == (1, 0, 0)
    assert second.limit == 2
    assert 0 < second.reset_after <= 60
    assert (first.allowed, second.allowed, third.allowed) == (True, True, False)


def test_reset_clears_counters():
    limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60)
    limiter.allow("a")

    limiter.reset()

    assert limiter.allow("a") is True


@pytest.mark.parametrize("max_requests, window", [(0, 60), (1, 0)])
def test_rejects_bad_configuration(max_requests, window):
    with pytest.raises(ValueError):
        FixedWindowRateLimiter(max_requests=max_requests, window_seconds=window)
