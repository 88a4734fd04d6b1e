"""
Tests for the redis checkout lock
"""

from unittest.mock import Mock

import pytest
import redis

from storefront.services.lock_service import LockService


@pytest.fixture
def redis_client():
    return Mock(spec=redis.Redis)


class TestLockService:
    def test_acquire_uses_set_nx_ex(self, redis_client):
        redis_client.set.return_value = True
        locks = LockService(client=redis_client)

        assert locks.acquire_checkout_lock("s1", "user-1", ttl=30) is True
        redis_client.set.assert_called_once_with(
            name="checkout:s1:lock", value="user-1", nx=True, ex=30
        )

    def test_acquire_returns_false_when_held(self, redis_client):
        redis_client.set.return_value = None
        locks = LockService(client=redis_client)

        assert locks.acquire_checkout_lock("s1", "user-2", ttl=30) is False

    def test_release_is_owner_checked(self, redis_client):
        redis_client.eval.return_value = 0
        locks = LockService(client=redis_client)

        assert locks.release_checkout_lock("s1", "user-2") is False
        args = redis_client.eval.call_args.args
        assert args[1:] == (1, "checkout:s1:lock", "user-2")

    def test_redis_errors_are_retried(self, redis_client):
        redis_client.set.side_effect = [redis.ConnectionError("blip"), True]
        locks = LockService(client=redis_client)

        assert locks.acquire_checkout_lock("s1", "user-1", ttl=30) is True
        assert redis_client.set.call_count == 2
