from unittest.mock import MagicMock

import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.stub import Stubber

from sdb_primitives_tool.coordination.core.client import SimpleDBClient
from sdb_primitives_tool.coordination.core.store import SimpleDBStore
from sdb_primitives_tool.coordination.exceptions import (
    AttributeMissingError,
    AWSPermissionError,
    AWSThrottlingError,
    ConditionFailedError,
    CoordinationError,
    DomainNotFoundError,
    ItemNotFoundError,
    StoreUnavailableError,
)

DOMAIN = "locks"


@pytest.fixture
def sdb(aws_credentials):
    client = SimpleDBClient(region="us-east-1")
    with Stubber(client.client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


@pytest.mark.unit
class TestSimpleDBClient:
    def test_put_attributes_with_expectation(self, sdb):
        client, stubber = sdb
        stubber.add_response(
            "put_attributes",
            {},
            {
                "DomainName": DOMAIN,
                "ItemName": "counter:a",
                "Attributes": [{"Name": "counter", "Value": "5", "Replace": True}],
                "Expected": {"Name": "counter", "Value": "4", "Exists": True},
            },
        )

        client.put_attributes(
            DOMAIN,
            "counter:a",
            {"counter": "5"},
            expected={"Name": "counter", "Value": "4", "Exists": True},
        )

    def test_get_attributes_uses_consistent_read(self, sdb):
        client, stubber = sdb
        stubber.add_response(
            "get_attributes",
            {
                "Attributes": [
                    {"Name": "state", "Value": "locked"},
                    {"Name": "counter", "Value": "7"},
                ]
            },
            {
                "DomainName": DOMAIN,
                "ItemName": "mutex:a",
                "AttributeNames": ["state", "counter"],
                "ConsistentRead": True,
            },
        )

        assert client.get_attributes(DOMAIN, "mutex:a", ["state", "counter"]) == {
            "state": "locked",
            "counter": "7",
        }

    def test_get_attributes_missing_item_is_empty(self, sdb):
        client, stubber = sdb
        stubber.add_response("get_attributes", {})

        assert client.get_attributes(DOMAIN, "mutex:a", ["state"]) == {}

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("ConditionalCheckFailed", ConditionFailedError),
            ("AttributeDoesNotExist", AttributeMissingError),
            ("NoSuchDomain", DomainNotFoundError),
            ("ServiceUnavailable", StoreUnavailableError),
            ("RequestLimitExceeded", AWSThrottlingError),
            ("AuthFailure", AWSPermissionError),
            ("InvalidParameterValue", CoordinationError),
        ],
    )
    def test_error_mapping(self, sdb, code, expected):
        client, stubber = sdb
        stubber.add_client_error("put_attributes", service_error_code=code, http_status_code=400)

        with pytest.raises(expected):
            client.put_attributes(DOMAIN, "counter:a", {"counter": "1"})

    def test_throttling_is_retryable(self):
        assert issubclass(AWSThrottlingError, StoreUnavailableError)

    def test_transport_error_is_unavailable(self, aws_credentials):
        client = SimpleDBClient(region="us-east-1")
        client.client = MagicMock()
        client.client.get_attributes.side_effect = EndpointConnectionError(
            endpoint_url="https://sdb.amazonaws.com"
        )

        with pytest.raises(StoreUnavailableError):
            client.get_attributes(DOMAIN, "counter:a", ["counter"])

    def test_domain_metadata(self, sdb):
        client, stubber = sdb
        stubber.add_response(
            "domain_metadata",
            {"ItemCount": 3, "AttributeNameCount": 3, "AttributeValueCount": 7, "Timestamp": 1700},
            {"DomainName": DOMAIN},
        )

        assert client.domain_metadata(DOMAIN)["ItemCount"] == 3


@pytest.mark.unit
class TestSimpleDBStore:
    @pytest.mark.asyncio
    async def test_create_if_absent_created(self, sdb):
        client, stubber = sdb
        stubber.add_response(
            "put_attributes",
            {},
            {
                "DomainName": DOMAIN,
                "ItemName": "mutex:a",
                "Attributes": [
                    {"Name": "state", "Value": "unlocked", "Replace": False},
                    {"Name": "counter", "Value": "0", "Replace": False},
                ],
                "Expected": {"Name": "counter", "Exists": False},
            },
        )

        store = SimpleDBStore(client)
        created = await store.create_if_absent(
            DOMAIN, "mutex:a", {"state": "unlocked", "counter": "0"}, "counter"
        )
        assert created is True

    @pytest.mark.asyncio
    async def test_create_if_absent_already_exists(self, sdb):
        client, stubber = sdb
        stubber.add_client_error(
            "put_attributes", service_error_code="ConditionalCheckFailed", http_status_code=409
        )

        store = SimpleDBStore(client)
        assert await store.create_if_absent(DOMAIN, "counter:a", {"counter": "0"}, "counter") is False

    @pytest.mark.asyncio
    async def test_create_if_absent_other_error_propagates(self, sdb):
        client, stubber = sdb
        stubber.add_client_error("put_attributes", service_error_code="NoSuchDomain")

        store = SimpleDBStore(client)
        with pytest.raises(DomainNotFoundError):
            await store.create_if_absent(DOMAIN, "counter:a", {"counter": "0"}, "counter")

    @pytest.mark.asyncio
    async def test_read_attributes_missing_item(self, sdb):
        client, stubber = sdb
        stubber.add_response("get_attributes", {})

        store = SimpleDBStore(client)
        with pytest.raises(ItemNotFoundError):
            await store.read_attributes(DOMAIN, "counter:a", ["counter"])

    @pytest.mark.asyncio
    async def test_read_attributes_missing_attribute(self, sdb):
        client, stubber = sdb
        stubber.add_response("get_attributes", {"Attributes": [{"Name": "state", "Value": "locked"}]})

        store = SimpleDBStore(client)
        with pytest.raises(AttributeMissingError):
            await store.read_attributes(DOMAIN, "mutex:a", ["state", "counter"])

    @pytest.mark.asyncio
    async def test_conditional_replace_expects_value(self, sdb):
        client, stubber = sdb
        stubber.add_response(
            "put_attributes",
            {},
            {
                "DomainName": DOMAIN,
                "ItemName": "counter:a",
                "Attributes": [{"Name": "counter", "Value": "2", "Replace": True}],
                "Expected": {"Name": "counter", "Value": "1", "Exists": True},
            },
        )

        store = SimpleDBStore(client)
        await store.conditional_replace(DOMAIN, "counter:a", {"counter": "2"}, "counter", "1")

    @pytest.mark.asyncio
    async def test_conditional_replace_expects_absent(self, sdb):
        client, stubber = sdb
        stubber.add_response(
            "put_attributes",
            {},
            {
                "DomainName": DOMAIN,
                "ItemName": "counter:a",
                "Attributes": [{"Name": "counter", "Value": "0", "Replace": True}],
                "Expected": {"Name": "counter", "Exists": False},
            },
        )

        store = SimpleDBStore(client)
        await store.conditional_replace(DOMAIN, "counter:a", {"counter": "0"}, "counter", None)

    @pytest.mark.asyncio
    async def test_conditional_replace_conflict(self, sdb):
        client, stubber = sdb
        stubber.add_client_error(
            "put_attributes", service_error_code="ConditionalCheckFailed", http_status_code=409
        )

        store = SimpleDBStore(client)
        with pytest.raises(ConditionFailedError):
            await store.conditional_replace(DOMAIN, "counter:a", {"counter": "2"}, "counter", "1")
