# app/services/booking/booking_lock.py
"""
Serializes appointment writes per barber and calendar day.

The "local" backend only protects a single process; deployments running
several API workers must use the "redis" backend.
"""
import threading
from contextlib import contextmanager
from datetime import date
from typing import Dict, Iterator, Tuple
from uuid import UUID

from redis.exceptions import LockError

from app.config.redis import RedisKeys, get_redis
from app.config.settings import get_settings
from app.core.exceptions import BookingLockTimeout
import logging

logger = logging.getLogger(__name__)
settings = get_settings()

# key -> (lock, number of callers holding or waiting for it)
_local_locks: Dict[str, Tuple[threading.Lock, int]] = {}
_local_locks_guard = threading.Lock()


def lock_key(barber_id: UUID, day: date) -> str:
    return RedisKeys.BOOKING_LOCK.format(barber_id=barber_id, date=day.isoformat())


def _checkout_local_lock(key: str) -> threading.Lock:
    with _local_locks_guard:
        lock, users = _local_locks.get(key, (None, 0))
        if lock is None:
            lock = threading.Lock()
        _local_locks[key] = (lock, users + 1)
        return lock


def _return_local_lock(key: str) -> None:
    """Forget the lock once no caller holds or waits for it"""
    with _local_locks_guard:
        lock, users = _local_locks[key]
        if users <= 1:
            del _local_locks[key]
        else:
            _local_locks[key] = (lock, users - 1)


@contextmanager
def _local_booking_lock(key: str) -> Iterator[None]:
    lock = _checkout_local_lock(key)
    try:
        if not lock.acquire(timeout=settings.BOOKING_LOCK_WAIT_SECONDS):
            raise BookingLockTimeout()
        try:
            yield
        finally:
            lock.release()
    finally:
        _return_local_lock(key)


@contextmanager
def _redis_booking_lock(key: str) -> Iterator[None]:
    lock = get_redis().lock(
        key,
        timeout=settings.BOOKING_LOCK_TIMEOUT_SECONDS,
        blocking_timeout=settings.BOOKING_LOCK_WAIT_SECONDS,
    )
    if not lock.acquire():
        raise BookingLockTimeout()
    try:
        yield
    finally:
        try:
            lock.release()
        except LockError:
            # Expired before release; the unique index still guards the write
            logger.warning(f"Booking lock {key} expired before release")


@contextmanager
def booking_lock(barber_id: UUID, day: date) -> Iterator[None]:
    """Hold the write lock for one barber's calendar day"""
    key = lock_key(barber_id, day)

    if settings.BOOKING_LOCK_BACKEND == "redis":
        with _redis_booking_lock(key):
            yield
    else:
        with _local_booking_lock(key):
            yield
