"""Tests for Redis caching implementation."""

from unittest.mock import AsyncMock

import pytest
import redis

from app.core.redis_client import CacheManager


@pytest.mark.asyncio
async def test_cache_manager_get_json():
    """Test CacheManager get_json method."""
    mock_redis = AsyncMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    # Test cache miss
    mock_redis.get.return_value = None
    result = await cache_manager.get_json("appointments:v0:all")
    assert result is None
    mock_redis.get.assert_awaited_once_with("appointments:v0:all")

    # Test cache hit
    mock_redis.reset_mock()
    mock_redis.get.return_value = '[{"timeSlot": "09:00", "doctorId": "D1"}]'
    result = await cache_manager.get_json("appointments:v0:all")
    assert result == [{"timeSlot": "09:00", "doctorId": "D1"}]


@pytest.mark.asyncio
async def test_cache_manager_set_json():
    """Test CacheManager set_json method."""
    mock_redis = AsyncMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    test_data = [{"timeSlot": "09:00"}]

    # Test without TTL
    result = await cache_manager.set_json("appointments:v0:doctor:D1", test_data)
    assert result is True
    mock_redis.set.assert_awaited_once()

    # Test with TTL
    mock_redis.reset_mock()
    result = await cache_manager.set_json("appointments:v0:doctor:D1", test_data, ttl=60)
    assert result is True
    mock_redis.setex.assert_awaited_once_with(
        "appointments:v0:doctor:D1", 60, '[{"timeSlot": "09:00"}]'
    )


@pytest.mark.asyncio
async def test_cache_manager_incr():
    """Test CacheManager incr method."""
    mock_redis = AsyncMock()
    mock_redis.incr.return_value = 4
    cache_manager = CacheManager(redis_client=mock_redis)

    assert await cache_manager.incr("appointments:generation") == 4
    mock_redis.incr.assert_awaited_once_with("appointments:generation")


@pytest.mark.asyncio
async def test_cache_manager_fails_open():
    """Test Redis errors are treated as misses and failed writes."""
    mock_redis = AsyncMock()
    mock_redis.get.side_effect = redis.ConnectionError("down")
    mock_redis.set.side_effect = redis.ConnectionError("down")
    mock_redis.incr.side_effect = redis.ConnectionError("down")
    cache_manager = CacheManager(redis_client=mock_redis)

    assert await cache_manager.get_json("appointments:v0:all") is None
    assert await cache_manager.set_json("appointments:v0:all", []) is False
    assert await cache_manager.incr("appointments:generation") is None
