"""
Mutex operations for coordination primitives.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from ..constants import (
    ATTR_COUNTER,
    ATTR_EXPIRES,
    ATTR_STATE,
    DEFAULT_LOCK_TTL_MS,
    DEFAULT_MAX_TRIES,
    PREFIX_MUTEX,
)
from ..exceptions import (
    ConditionFailedError,
    LockFailedError,
    LockHeldError,
    RetriesExhaustedError,
    StoreUnavailableError,
    UnlockFailedError,
)
from ..logging_config import get_logger
from ..models import MutexRecord, MutexState
from ..utils import format_key, now_ms
from .record import RecordHandle
from .retry import BackoffPolicy, retry_with_backoff
from .store import AttributeStore

logger = get_logger(__name__)

_RETRY_ON = (ConditionFailedError, StoreUnavailableError)


class DistributedMutex(RecordHandle):
    """
    Lease-based lock stored in a SimpleDB item.

    The item holds state, lease expiry and a generation counter. Every
    successful lock or unlock bumps the counter by one and is written with a
    condition on the counter value just read. The counter returned by lock()
    is the guard that unlock() must present, so a holder whose lease expired
    cannot release a lock somebody else has since acquired.
    """

    def __init__(
        self,
        store: AttributeStore,
        mutex_id: str,
        domain: str,
        default_ttl_ms: int = DEFAULT_LOCK_TTL_MS,
        policy: BackoffPolicy | None = None,
    ):
        """
        Initialize mutex handle.

        Args:
            store: Conditional attribute store
            mutex_id: Lock identity
            domain: SimpleDB domain name
            default_ttl_ms: Lease used when lock() gets no ttl_ms
            policy: Backoff settings (optional)
        """
        super().__init__(
            store,
            domain,
            format_key(PREFIX_MUTEX, mutex_id),
            {
                ATTR_STATE: MutexState.UNLOCKED.value,
                ATTR_EXPIRES: "0",
                ATTR_COUNTER: "0",
            },
            policy,
        )
        self.mutex_id = mutex_id
        self.default_ttl_ms = default_ttl_ms

    async def _read(self, names: list[str]) -> MutexRecord:
        attributes = await self.store.read_attributes(self.domain, self.item_name, names)
        return MutexRecord.from_attributes(self.item_name, attributes)

    async def lock(self, ttl_ms: int | None = None, max_tries: int = DEFAULT_MAX_TRIES) -> int:
        """
        Acquire the lock.

        Args:
            ttl_ms: Lease in milliseconds (default: handle default)
            max_tries: Retry budget (non-positive means unlimited)

        Returns:
            Guard token to pass to unlock()

        Raises:
            LockFailedError: If the lock stayed unavailable for the whole budget
        """
        ttl = self.default_ttl_ms if ttl_ms is None else ttl_ms
        await self.ensure_exists()

        async def attempt() -> int:
            record = await self._read([ATTR_STATE, ATTR_EXPIRES, ATTR_COUNTER])
            now = now_ms()
            if not record.is_lockable(now):
                raise LockHeldError(
                    f"Lock '{self.item_name}' is held until {record.expires} "
                    f"(generation {record.counter})"
                )

            guard = record.counter + 1
            await self.store.conditional_replace(
                self.domain,
                self.item_name,
                {
                    ATTR_STATE: MutexState.LOCKED.value,
                    ATTR_EXPIRES: str(now + ttl),
                    ATTR_COUNTER: str(guard),
                },
                ATTR_COUNTER,
                str(record.counter),
            )
            if record.state is MutexState.LOCKED:
                logger.info(f"Reclaimed expired lock '{self.item_name}' (generation {guard})")
            return guard

        try:
            guard = await retry_with_backoff(
                attempt, max_tries, _RETRY_ON, self.policy, f"lock '{self.item_name}'"
            )
        except RetriesExhaustedError as e:
            raise LockFailedError(e.reason) from e

        logger.debug(f"Locked '{self.item_name}' with guard {guard} for {ttl}ms")
        return guard

    async def unlock(self, guard: int, max_tries: int = DEFAULT_MAX_TRIES) -> bool:
        """
        Release the lock acquired with guard.

        A guard older than the current generation means the lease expired and
        the lock moved on; nothing is released and the call still succeeds.

        Args:
            guard: Token returned by lock()
            max_tries: Retry budget (non-positive means unlimited)

        Returns:
            True if the lock was released, False for a stale guard

        Raises:
            UnlockFailedError: If the retry budget is used up
        """
        await self.ensure_exists()

        async def attempt() -> bool:
            record = await self._read([ATTR_STATE, ATTR_COUNTER])

            if record.state is MutexState.LOCKED and record.counter == guard:
                await self.store.conditional_replace(
                    self.domain,
                    self.item_name,
                    {
                        ATTR_STATE: MutexState.UNLOCKED.value,
                        ATTR_COUNTER: str(guard + 1),
                    },
                    ATTR_COUNTER,
                    str(guard),
                )
                return True
            if record.counter > guard:
                return False
            raise ConditionFailedError(
                f"Guard {guard} does not match '{self.item_name}' "
                f"(state {record.state.value}, generation {record.counter})"
            )

        try:
            released = await retry_with_backoff(
                attempt, max_tries, _RETRY_ON, self.policy, f"unlock '{self.item_name}'"
            )
        except RetriesExhaustedError as e:
            raise UnlockFailedError(e.reason) from e

        if released:
            logger.debug(f"Unlocked '{self.item_name}' (guard {guard})")
        else:
            logger.info(f"Guard {guard} for '{self.item_name}' is stale, nothing to release")
        return released

    async def check(self) -> MutexRecord:
        """Return a snapshot of the lock record."""
        await self.ensure_exists()
        return await self._read([ATTR_STATE, ATTR_EXPIRES, ATTR_COUNTER])

    @asynccontextmanager
    async def held(
        self, ttl_ms: int | None = None, max_tries: int = DEFAULT_MAX_TRIES
    ) -> AsyncIterator[int]:
        """
        Hold the lock for the duration of an async with block.

        Usage:
            async with mutex.held(ttl_ms=5000) as guard:
                ...
        """
        guard = await self.lock(ttl_ms, max_tries)
        try:
            yield guard
        finally:
            await self.unlock(guard, max_tries)
