"""
Domain management operations for coordination primitives.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any

from ..utils import validate_domain_name
from .client import SimpleDBClient


def create_domain(client: SimpleDBClient, domain: str) -> dict[str, Any]:
    """
    Create the SimpleDB domain holding counter and mutex items.

    SimpleDB treats creating an existing domain as success.

    Args:
        client: SimpleDB client
        domain: Domain name

    Returns:
        Confirmation document

    Raises:
        ValueError: If the domain name is invalid
        CoordinationError: For SimpleDB errors
    """
    validate_domain_name(domain)
    client.create_domain(domain)
    return {"domain": domain, "status": "created"}


def drop_domain(client: SimpleDBClient, domain: str) -> dict[str, Any]:
    """
    Delete the domain with every counter and mutex in it.

    Args:
        client: SimpleDB client
        domain: Domain name

    Returns:
        Confirmation document
    """
    validate_domain_name(domain)
    client.delete_domain(domain)
    return {"domain": domain, "status": "deleted"}


def describe_domain(client: SimpleDBClient, domain: str) -> dict[str, Any]:
    """
    Describe the domain.

    Returns:
        Domain name with item and attribute counts

    Raises:
        DomainNotFoundError: If the domain does not exist
    """
    metadata = client.domain_metadata(domain)
    return {
        "domain": domain,
        "items": metadata.get("ItemCount", 0),
        "attribute_names": metadata.get("AttributeNameCount", 0),
        "attribute_values": metadata.get("AttributeValueCount", 0),
        "timestamp": metadata.get("Timestamp"),
    }
