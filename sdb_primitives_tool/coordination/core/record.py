"""
Lazily created SimpleDB record shared by counters and mutexes.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import asyncio

from ..constants import ATTR_COUNTER
from ..logging_config import get_logger
from .retry import DEFAULT_POLICY, BackoffPolicy
from .store import AttributeStore

logger = get_logger(__name__)


class RecordHandle:
    """
    Client handle for one record, created on first use.

    The record is created at most once per handle: concurrent first callers
    wait on the same lock and only one create request is issued. A failed
    create leaves the handle uninitialized so the next call tries again.
    """

    def __init__(
        self,
        store: AttributeStore,
        domain: str,
        item_name: str,
        initial_attributes: dict[str, str],
        policy: BackoffPolicy | None = None,
    ):
        self.store = store
        self.domain = domain
        self.item_name = item_name
        self.policy = policy or DEFAULT_POLICY
        self._initial_attributes = initial_attributes
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def ensure_exists(self) -> bool:
        """
        Create the record if it does not exist yet.

        Returns:
            True if this call created the record, False otherwise
        """
        if self._initialized:
            return False

        async with self._init_lock:
            if self._initialized:
                return False
            created = await self.store.create_if_absent(
                self.domain, self.item_name, self._initial_attributes, ATTR_COUNTER
            )
            self._initialized = True

        if created:
            logger.info(f"Initialized '{self.item_name}' in domain '{self.domain}'")
        return created
