import pytest

from sdb_primitives_tool.coordination.exceptions import CorruptRecordError
from sdb_primitives_tool.coordination.models import CounterRecord, MutexRecord, MutexState
from sdb_primitives_tool.coordination.utils import format_key, validate_domain_name, validate_key


@pytest.mark.unit
class TestMutexRecord:
    def test_from_attributes(self):
        record = MutexRecord.from_attributes(
            "mutex:a", {"state": "locked", "expires": "1500", "counter": "4"}
        )
        assert record == MutexRecord("mutex:a", MutexState.LOCKED, 1500, 4)

    @pytest.mark.parametrize(
        "state,expires,now,lockable",
        [
            ("unlocked", 0, 1000, True),
            ("unlocked", 5000, 1000, True),
            ("locked", 5000, 1000, False),
            ("locked", 1000, 1000, False),
            ("locked", 999, 1000, True),
        ],
    )
    def test_is_lockable(self, state, expires, now, lockable):
        record = MutexRecord("mutex:a", MutexState(state), expires, 1)
        assert record.is_lockable(now) is lockable

    def test_bad_counter(self):
        with pytest.raises(CorruptRecordError):
            MutexRecord.from_attributes("mutex:a", {"state": "locked", "expires": "1", "counter": "1.5"})


@pytest.mark.unit
class TestCounterRecord:
    def test_negative_value(self):
        assert CounterRecord.from_attributes("counter:a", {"counter": "-12"}).value == -12


@pytest.mark.unit
class TestUtils:
    def test_format_key(self):
        assert format_key("counter", "jobs") == "counter:jobs"

    @pytest.mark.parametrize("name", ["", "ab", "bad name", "x" * 256])
    def test_invalid_domain_names(self, name):
        with pytest.raises(ValueError):
            validate_domain_name(name)

    def test_valid_domain_name(self):
        assert validate_domain_name("locks_prod-1.eu")

    def test_key_too_long(self):
        with pytest.raises(ValueError):
            validate_key("k" * 1001)
