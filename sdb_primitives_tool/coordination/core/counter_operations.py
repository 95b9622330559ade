"""
Counter operations for coordination primitives.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from ..constants import ATTR_COUNTER, DEFAULT_MAX_TRIES, PREFIX_COUNTER
from ..exceptions import (
    ConditionFailedError,
    IncrementFailedError,
    ReadFailedError,
    RetriesExhaustedError,
    StoreUnavailableError,
)
from ..logging_config import get_logger
from ..models import CounterRecord, CounterUpdate
from ..utils import format_key
from .record import RecordHandle
from .retry import BackoffPolicy, retry_with_backoff
from .store import AttributeStore

logger = get_logger(__name__)


class AtomicCounter(RecordHandle):
    """
    Shared integer stored in a SimpleDB item.

    Every change is a consistent read followed by a conditional write that
    expects the value just read. A lost race is retried with backoff, so a
    successful add is applied exactly once.
    """

    def __init__(
        self,
        store: AttributeStore,
        counter_id: str,
        domain: str,
        initial_value: int = 0,
        policy: BackoffPolicy | None = None,
    ):
        """
        Initialize counter handle.

        Args:
            store: Conditional attribute store
            counter_id: Counter identity
            domain: SimpleDB domain name
            initial_value: Value stored when the counter is first created
            policy: Backoff settings (optional)
        """
        super().__init__(
            store,
            domain,
            format_key(PREFIX_COUNTER, counter_id),
            {ATTR_COUNTER: str(initial_value)},
            policy,
        )
        self.counter_id = counter_id

    async def _read(self) -> CounterRecord:
        attributes = await self.store.read_attributes(self.domain, self.item_name, [ATTR_COUNTER])
        return CounterRecord.from_attributes(self.item_name, attributes)

    async def add(self, amount: int, max_tries: int = DEFAULT_MAX_TRIES) -> CounterUpdate:
        """
        Atomically add amount to the counter.

        Args:
            amount: Value to add (may be negative)
            max_tries: Retry budget (non-positive means unlimited)

        Returns:
            The value before and after this add

        Raises:
            IncrementFailedError: If the retry budget is used up
            ItemNotFoundError: If the counter item disappeared
            AttributeMissingError: If the counter attribute disappeared
            CorruptRecordError: If the stored value is not an integer
        """
        await self.ensure_exists()

        async def attempt() -> CounterUpdate:
            record = await self._read()
            new_value = record.value + amount
            await self.store.conditional_replace(
                self.domain,
                self.item_name,
                {ATTR_COUNTER: str(new_value)},
                ATTR_COUNTER,
                str(record.value),
            )
            return CounterUpdate(record.value, new_value)

        try:
            update = await retry_with_backoff(
                attempt,
                max_tries,
                (ConditionFailedError, StoreUnavailableError),
                self.policy,
                f"add {amount} to '{self.item_name}'",
            )
        except RetriesExhaustedError as e:
            raise IncrementFailedError(e.reason) from e

        logger.debug(f"Counter '{self.item_name}': {update.old_value} -> {update.new_value}")
        return update

    async def increment(self, max_tries: int = DEFAULT_MAX_TRIES) -> CounterUpdate:
        return await self.add(1, max_tries)

    async def decrement(self, max_tries: int = DEFAULT_MAX_TRIES) -> CounterUpdate:
        return await self.add(-1, max_tries)

    async def get(self, max_tries: int = DEFAULT_MAX_TRIES) -> int:
        """
        Read the current counter value.

        Only transient store failures are retried.

        Raises:
            ReadFailedError: If the retry budget is used up
        """
        await self.ensure_exists()

        async def attempt() -> int:
            return (await self._read()).value

        try:
            return await retry_with_backoff(
                attempt,
                max_tries,
                (StoreUnavailableError,),
                self.policy,
                f"read '{self.item_name}'",
            )
        except RetriesExhaustedError as e:
            raise ReadFailedError(e.reason) from e
