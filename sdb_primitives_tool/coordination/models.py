"""
Type models for coordination primitives.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .constants import ATTR_COUNTER, ATTR_EXPIRES, ATTR_STATE
from .exceptions import CorruptRecordError


class MutexState(Enum):
    """States of a mutex record."""

    UNLOCKED = "unlocked"
    LOCKED = "locked"


def parse_int(name: str, value: str) -> int:
    """
    Parse a base-10 attribute value.

    Args:
        name: Attribute name (for the error message)
        value: Stored text value

    Returns:
        Parsed integer

    Raises:
        CorruptRecordError: If the value is not a base-10 integer
    """
    try:
        return int(value, 10)
    except (TypeError, ValueError):
        raise CorruptRecordError(f"Attribute '{name}' holds non-integer value {value!r}")


@dataclass(frozen=True)
class CounterUpdate:
    """Result of a successful counter add."""

    old_value: int
    new_value: int

    def to_dict(self) -> dict[str, Any]:
        return {"old_value": self.old_value, "new_value": self.new_value}


@dataclass
class CounterRecord:
    """Counter item as stored in SimpleDB."""

    item_name: str
    value: int

    @classmethod
    def from_attributes(cls, item_name: str, attributes: dict[str, str]) -> "CounterRecord":
        return cls(item_name, parse_int(ATTR_COUNTER, attributes[ATTR_COUNTER]))


@dataclass
class MutexRecord:
    """Mutex item as stored in SimpleDB."""

    item_name: str
    state: MutexState
    expires: int
    counter: int

    @classmethod
    def from_attributes(cls, item_name: str, attributes: dict[str, str]) -> "MutexRecord":
        """
        Build a record from raw SimpleDB attributes.

        Args:
            item_name: SimpleDB item name
            attributes: Mapping with state, expires and counter

        Returns:
            Parsed mutex record

        Raises:
            CorruptRecordError: If a value cannot be parsed
        """
        try:
            state = MutexState(attributes[ATTR_STATE])
        except ValueError:
            raise CorruptRecordError(
                f"Attribute '{ATTR_STATE}' holds unknown state {attributes[ATTR_STATE]!r}"
            )
        return cls(
            item_name=item_name,
            state=state,
            expires=parse_int(ATTR_EXPIRES, attributes.get(ATTR_EXPIRES, "0")),
            counter=parse_int(ATTR_COUNTER, attributes[ATTR_COUNTER]),
        )

    def is_expired(self, now_ms: int) -> bool:
        return self.expires < now_ms

    def is_lockable(self, now_ms: int) -> bool:
        """Unlocked records and locked records with an expired lease can be taken."""
        return self.state is MutexState.UNLOCKED or self.is_expired(now_ms)

    def to_dict(self, now_ms: int) -> dict[str, Any]:
        return {
            "item": self.item_name,
            "state": self.state.value,
            "expires": self.expires,
            "counter": self.counter,
            "lockable": self.is_lockable(now_ms),
        }
