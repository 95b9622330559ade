"""
Utility functions for coordination operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import json
import re
import time
from typing import Any

_DOMAIN_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.-]+$")


def format_key(prefix: str, key: str) -> str:
    """
    Format an item name with namespace prefix.

    Args:
        prefix: Namespace prefix (e.g., 'counter', 'mutex')
        key: User-provided identity

    Returns:
        Formatted item name with prefix (e.g., 'counter:mykey')
    """
    return f"{prefix}:{key}"


def now_ms() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


def output_json(data: dict[str, Any], quiet: bool = False) -> None:
    """
    Output JSON to stdout.

    Args:
        data: Data to output as JSON
        quiet: If True, suppress output
    """
    if not quiet:
        print(json.dumps(data))


def output_text(message: str, quiet: bool = False) -> None:
    """
    Output text to stdout.

    Args:
        message: Message to output
        quiet: If True, suppress output
    """
    if not quiet:
        print(message)


def error_json(error: str, solution: str, exit_code: int, **extra: Any) -> str:
    """
    Format error as a JSON document.

    Args:
        error: Error message
        solution: Solution suggestion
        exit_code: Exit code
        extra: Additional fields (e.g. reason)

    Returns:
        Serialized error document
    """
    return json.dumps({"error": error, "solution": solution, "exit_code": exit_code, **extra})


def error_text(error: str, solution: str) -> str:
    """
    Format error as human-readable text.

    Args:
        error: Error message
        solution: Solution suggestion

    Returns:
        Formatted error message
    """
    return f"❌ Error: {error}\n\n💡 Solution: {solution}"


def validate_domain_name(domain_name: str) -> bool:
    """
    Validate SimpleDB domain name.

    Args:
        domain_name: Domain name to validate

    Returns:
        True if valid

    Raises:
        ValueError: If domain name is invalid
    """
    if not domain_name:
        raise ValueError("Domain name cannot be empty")
    if len(domain_name) < 3 or len(domain_name) > 255:
        raise ValueError("Domain name must be between 3 and 255 characters")
    if not _DOMAIN_NAME_PATTERN.match(domain_name):
        raise ValueError(
            "Domain name can only contain alphanumeric characters, hyphens, underscores, and periods"
        )
    return True


def validate_key(key: str) -> bool:
    """
    Validate counter or mutex identity.

    Args:
        key: Identity to validate

    Returns:
        True if valid

    Raises:
        ValueError: If identity is invalid
    """
    if not key:
        raise ValueError("Key cannot be empty")
    # SimpleDB item names are limited to 1024 bytes including the prefix
    if len(key.encode("utf-8")) > 1000:
        raise ValueError("Key cannot exceed 1000 bytes")
    return True
