import time

from entrega_shared.security_middleware import RateLimiter


def test_rate_limiter_blocks_after_limit():
    limiter = RateLimiter()

    assert limiter.is_allowed("10.0.0.1:/api/auth/login", 2, 60) == (True, 1)
    assert limiter.is_allowed("10.0.0.1:/api/auth/login", 2, 60) == (True, 0)
    assert limiter.is_allowed("10.0.0.1:/api/auth/login", 2, 60) == (False, 0)
    assert limiter.is_allowed("10.0.0.2:/api/auth/login", 2, 60) == (True, 1)


def test_clean_old_entries_drops_idle_keys():
    limiter = RateLimiter()
    now = time.time()
    limiter.requests["10.0.0.1:/api/auth/login"] = [now - 7200]
    limiter.requests["10.0.0.2:/api/auth/login"] = [now - 7200, now - 10]

    limiter.clean_old_entries()

    assert dict(limiter.requests) == {"10.0.0.2:/api/auth/login": [now - 10]}


def test_idle_keys_are_pruned_on_later_requests():
    limiter = RateLimiter(cleanup_interval=300)
    limiter.requests["10.0.0.1:/api/auth/signup"] = [time.time() - 7200]
    limiter._last_cleanup = time.time() - 301

    limiter.is_allowed("10.0.0.2:/api/auth/login", 5, 60)

    assert set(limiter.requests) == {"10.0.0.2:/api/auth/login"}
