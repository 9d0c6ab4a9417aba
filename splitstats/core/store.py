"""
Counter stores backing alternative statistics.

Alternatives never talk to Redis directly. They go through the small
hash-oriented contract below, so a deployment can hand in a Redis-backed
store while tests and local tooling use the in-process one.

Contract:
- hash_get returns the raw string value or None
- hash_set / hash_multi_set overwrite unconditionally (last writer wins)
- hash_set_if_absent only writes a field that does not exist yet
- hash_increment_by is atomic; concurrent callers never lose updates
- delete drops the whole record

Usage:
    from splitstats.core.cache import create_redis
    from splitstats.core.store import RedisCounterStore

    store = RedisCounterStore(create_redis())
    store.hash_increment_by("homepage:red", "participant_count", 1)
"""

import threading
from typing import Any, Mapping, Optional, Protocol

import structlog


class CounterStore(Protocol):
    def hash_get(self, key: str, field: str) -> Optional[str]: ...

    def hash_set(self, key: str, field: str, value: Any) -> None: ...

    def hash_set_if_absent(self, key: str, field: str, value: Any) -> bool: ...

    def hash_increment_by(self, key: str, field: str, delta: int) -> int: ...

    def hash_multi_set(self, key: str, mapping: Mapping[str, Any]) -> None: ...

    def delete(self, key: str) -> None: ...


class RedisCounterStore:
    """
    CounterStore over a Redis hash per alternative.

    Connection errors and timeouts raised by the client propagate to the
    caller unchanged.
    """

    def __init__(self, redis_client: Any):
        """
        Initialize RedisCounterStore.

        Args:
            redis_client: Redis client instance, ideally created with
                decode_responses=True
        """
        self.redis = redis_client
        self.logger = structlog.get_logger("counter_store")

    @staticmethod
    def _decode(value: Any) -> Optional[str]:
        if isinstance(value, bytes):
            return value.decode()
        return value

    def hash_get(self, key: str, field: str) -> Optional[str]:
        return self._decode(self.redis.hget(key, field))

    def hash_set(self, key: str, field: str, value: Any) -> None:
        self.redis.hset(key, field, value)

    def hash_set_if_absent(self, key: str, field: str, value: Any) -> bool:
        return bool(self.redis.hsetnx(key, field, value))

    def hash_increment_by(self, key: str, field: str, delta: int) -> int:
        return int(self.redis.hincrby(key, field, delta))

    def hash_multi_set(self, key: str, mapping: Mapping[str, Any]) -> None:
        if not mapping:
            return
        self.redis.hset(key, mapping=dict(mapping))

    def delete(self, key: str) -> None:
        self.redis.delete(key)
        self.logger.debug("counter_record_deleted", key=key)


class InMemoryCounterStore:
    """
    Process-local CounterStore.

    Values are kept as strings, the way Redis returns them, and every
    operation runs under a single lock so increments are atomic across
    threads.
    """

    def __init__(self):
        self._data: dict[str, dict[str, str]] = {}
        self._lock = threading.Lock()

    def hash_get(self, key: str, field: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key, {}).get(field)

    def hash_set(self, key: str, field: str, value: Any) -> None:
        with self._lock:
            self._data.setdefault(key, {})[field] = str(value)

    def hash_set_if_absent(self, key: str, field: str, value: Any) -> bool:
        with self._lock:
            record = self._data.setdefault(key, {})
            if field in record:
                return False
            record[field] = str(value)
            return True

    def hash_increment_by(self, key: str, field: str, delta: int) -> int:
        with self._lock:
            record = self._data.setdefault(key, {})
            current = record.get(field, "0")
            try:
                new_value = int(current) + int(delta)
            except ValueError:
                raise ValueError(f"hash value at {key}/{field} is not an integer") from None
            record[field] = str(new_value)
            return new_value

    def hash_multi_set(self, key: str, mapping: Mapping[str, Any]) -> None:
        with self._lock:
            record = self._data.setdefault(key, {})
            for field, value in mapping.items():
                record[field] = str(value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def fields(self, key: str) -> dict[str, str]:
        """Copy of every field stored under key."""
        with self._lock:
            return dict(self._data.get(key, {}))
