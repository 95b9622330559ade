"""
SimpleDB client wrapper with error handling.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import (
    AttributeMissingError,
    AWSPermissionError,
    AWSThrottlingError,
    ConditionFailedError,
    CoordinationError,
    DomainNotFoundError,
    StoreUnavailableError,
)

_THROTTLING_CODES = {"Throttling", "ThrottlingException", "RequestLimitExceeded"}
_UNAVAILABLE_CODES = {"ServiceUnavailable", "InternalError", "RequestTimeout"}
_PERMISSION_CODES = {
    "AuthFailure",
    "AccessFailure",
    "InvalidClientTokenId",
    "SignatureDoesNotMatch",
    "OptInRequired",
}


class SimpleDBClient:
    """SimpleDB client wrapper with error handling."""

    def __init__(
        self,
        region: str | None = None,
        profile: str | None = None,
    ):
        """
        Initialize SimpleDB client.

        Args:
            region: AWS region (optional, uses SDK default)
            profile: AWS profile (optional, uses SDK default)
        """
        session = boto3.Session(profile_name=profile, region_name=region)
        self.client = session.client("sdb")

    def put_attributes(
        self,
        domain: str,
        item_name: str,
        attributes: dict[str, str],
        replace: bool = True,
        expected: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Put attributes with optional expectation.

        Args:
            domain: SimpleDB domain name
            item_name: Item name
            attributes: Attribute name to text value
            replace: Replace existing values instead of adding new ones
            expected: Optional SimpleDB Expected clause (Name, Value, Exists)

        Returns:
            Response from SimpleDB

        Raises:
            ConditionFailedError: If the expectation fails
            CoordinationError: For other SimpleDB errors
        """
        try:
            kwargs: dict[str, Any] = {
                "DomainName": domain,
                "ItemName": item_name,
                "Attributes": [
                    {"Name": name, "Value": value, "Replace": replace}
                    for name, value in attributes.items()
                ],
            }
            if expected:
                kwargs["Expected"] = expected
            return self.client.put_attributes(**kwargs)  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e)
            raise  # For type checker

    def get_attributes(
        self, domain: str, item_name: str, names: list[str]
    ) -> dict[str, str]:
        """
        Get attributes by name with a consistent read.

        Args:
            domain: SimpleDB domain name
            item_name: Item name
            names: Attribute names to read

        Returns:
            Mapping of the attributes found (empty if the item does not exist)

        Raises:
            CoordinationError: For SimpleDB errors
        """
        try:
            response = self.client.get_attributes(
                DomainName=domain,
                ItemName=item_name,
                AttributeNames=names,
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e)
            raise  # For type checker

        attributes: dict[str, str] = {}
        for attribute in response.get("Attributes", []):
            # Multi-valued attributes never occur with Replace=True writes
            attributes.setdefault(attribute["Name"], attribute["Value"])
        return attributes

    def create_domain(self, domain: str) -> None:
        """
        Create a SimpleDB domain. Creating an existing domain is a no-op.

        Raises:
            CoordinationError: For SimpleDB errors
        """
        try:
            self.client.create_domain(DomainName=domain)
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e)

    def delete_domain(self, domain: str) -> None:
        """
        Delete a SimpleDB domain and every item in it.

        Raises:
            CoordinationError: For SimpleDB errors
        """
        try:
            self.client.delete_domain(DomainName=domain)
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e)

    def domain_metadata(self, domain: str) -> dict[str, Any]:
        """
        Describe a SimpleDB domain.

        Raises:
            DomainNotFoundError: If the domain does not exist
            CoordinationError: For other SimpleDB errors
        """
        try:
            response = self.client.domain_metadata(DomainName=domain)
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e)
            raise  # For type checker

        response.pop("ResponseMetadata", None)
        return response  # type: ignore[no-any-return]

    def _handle_error(self, error: ClientError | BotoCoreError) -> None:
        """
        Convert boto3 errors to coordination exceptions.

        Args:
            error: ClientError or transport error from boto3

        Raises:
            ConditionFailedError: If the expected value check failed
            AttributeMissingError: If the expected attribute does not exist
            DomainNotFoundError: If the domain does not exist
            AWSThrottlingError: If throttled
            StoreUnavailableError: If SimpleDB or the network is unavailable
            AWSPermissionError: If permission denied
            CoordinationError: For other errors
        """
        if isinstance(error, BotoCoreError):
            raise StoreUnavailableError(f"SimpleDB unreachable: {error}")

        code = error.response["Error"]["Code"]

        if code == "ConditionalCheckFailed":
            raise ConditionFailedError(f"Condition failed: {error}")
        elif code == "AttributeDoesNotExist":
            raise AttributeMissingError(f"Expected attribute missing: {error}")
        elif code == "NoSuchDomain":
            raise DomainNotFoundError(f"Domain not found: {error}")
        elif code in _THROTTLING_CODES:
            raise AWSThrottlingError("SimpleDB throttling - retry with backoff")
        elif code in _UNAVAILABLE_CODES:
            raise StoreUnavailableError(f"SimpleDB unavailable: {error}")
        elif code in _PERMISSION_CODES:
            raise AWSPermissionError("AWS permission denied")
        else:
            raise CoordinationError(f"SimpleDB error: {error}")
