"""
Conditional attribute store used by the coordination primitives.

The primitives only need three operations from the store: create an item if
a marker attribute is absent, read named attributes, and replace attributes
if an expected attribute still holds the value that was read. SimpleDBStore
provides them on top of SimpleDBClient without blocking the event loop.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import asyncio
from abc import ABC, abstractmethod

from ..exceptions import AttributeMissingError, ConditionFailedError, ItemNotFoundError
from ..logging_config import get_logger
from .client import SimpleDBClient

logger = get_logger(__name__)


class AttributeStore(ABC):
    """Async key/attribute store with optimistic conditional writes."""

    @abstractmethod
    async def create_if_absent(
        self, domain: str, item_name: str, attributes: dict[str, str], marker: str
    ) -> bool:
        """
        Create the item unless the marker attribute already exists.

        Returns:
            True if the item was created, False if it already existed
        """

    @abstractmethod
    async def read_attributes(
        self, domain: str, item_name: str, names: list[str]
    ) -> dict[str, str]:
        """
        Read named attributes.

        Raises:
            ItemNotFoundError: If the item does not exist
            AttributeMissingError: If a requested attribute is absent
        """

    @abstractmethod
    async def conditional_replace(
        self,
        domain: str,
        item_name: str,
        attributes: dict[str, str],
        expected_name: str,
        expected_value: str | None,
    ) -> None:
        """
        Replace attributes if expected_name holds expected_value.

        An expected_value of None means the attribute must not exist.

        Raises:
            ConditionFailedError: If the expectation does not hold
        """


def check_attributes(item_name: str, attributes: dict[str, str], names: list[str]) -> None:
    """
    Validate a read result against the requested names.

    Raises:
        ItemNotFoundError: If nothing was returned
        AttributeMissingError: If some names were not returned
    """
    if not attributes:
        raise ItemNotFoundError(f"Item '{item_name}' not found")
    missing = [name for name in names if name not in attributes]
    if missing:
        raise AttributeMissingError(
            f"Item '{item_name}' is missing attribute(s): {', '.join(missing)}"
        )


class SimpleDBStore(AttributeStore):
    """AttributeStore backed by Amazon SimpleDB."""

    def __init__(self, client: SimpleDBClient):
        self.client = client

    async def create_if_absent(
        self, domain: str, item_name: str, attributes: dict[str, str], marker: str
    ) -> bool:
        try:
            await asyncio.to_thread(
                self.client.put_attributes,
                domain,
                item_name,
                attributes,
                False,
                {"Name": marker, "Exists": False},
            )
        except ConditionFailedError:
            logger.debug(f"Item '{item_name}' already exists in '{domain}'")
            return False
        logger.debug(f"Created item '{item_name}' in '{domain}'")
        return True

    async def read_attributes(
        self, domain: str, item_name: str, names: list[str]
    ) -> dict[str, str]:
        attributes = await asyncio.to_thread(self.client.get_attributes, domain, item_name, names)
        check_attributes(item_name, attributes, names)
        return attributes

    async def conditional_replace(
        self,
        domain: str,
        item_name: str,
        attributes: dict[str, str],
        expected_name: str,
        expected_value: str | None,
    ) -> None:
        if expected_value is None:
            expected = {"Name": expected_name, "Exists": False}
        else:
            expected = {"Name": expected_name, "Value": expected_value, "Exists": True}
        await asyncio.to_thread(
            self.client.put_attributes, domain, item_name, attributes, True, expected
        )


def build_store(region: str | None = None, profile: str | None = None) -> SimpleDBStore:
    """Create a SimpleDB-backed store for the given AWS region and profile."""
    return SimpleDBStore(SimpleDBClient(region, profile))
