"""
Constants for coordination primitives.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

# Default SimpleDB domain name
DEFAULT_DOMAIN_NAME = "sdb-primitives-tool"

# Default retry budget per operation (non-positive means unlimited)
DEFAULT_MAX_TRIES = 10

# Default lock lease (in milliseconds)
DEFAULT_LOCK_TTL_MS = 10000  # 10 seconds

# Namespace prefixes for SimpleDB item names
PREFIX_COUNTER = "counter"
PREFIX_MUTEX = "mutex"

# SimpleDB attribute names
ATTR_COUNTER = "counter"
ATTR_STATE = "state"
ATTR_EXPIRES = "expires"

# Backoff between conflicting attempts
BACKOFF_BASE_MS = 10  # d = (1 + U(0,1)) * base * 2^attempt
BACKOFF_MAX_MS = 5000  # Upper bound for a single delay

# Failure reasons
REASON_MAX_TRIES = "Maximum number of tries exceeded"
