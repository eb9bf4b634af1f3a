"""Common configuration constants used across the application."""

# Consensus Layer Constants
SLOTS_PER_EPOCH = 32
"""Number of slots in one beacon chain epoch"""

HEAD_SLOT_ID = "head"
"""Beacon API block identifier for the current head"""

# Unit Constants
WEI_PER_GWEI = 10**9
"""Number of wei in one Gwei"""

WEI_PER_ETH = 10**18
"""Number of wei in one ETH"""

DECIMAL_PRECISION = 80
"""Decimal digits for unit conversion, enough for any uint256 amount"""

# Reward Classification
BUILDER_EXTRA_DATA_MARKER = b"build"
"""Substring of block extra_data that flags a builder (MEV) block"""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default HTTP request timeout in seconds"""

# Retry Configuration
MAX_ATTEMPTS = 1
"""Default number of attempts per upstream call (1 disables retries)"""

RETRY_BASE_DELAY = 0.5
"""Base delay for exponential backoff in seconds"""

RETRY_MAX_DELAY = 5.0
"""Maximum delay between retries in seconds"""

# HTTP Connection Pooling
MAX_KEEPALIVE_CONNECTIONS = 5
"""Maximum number of keepalive connections in pool"""

MAX_CONNECTIONS = 10
"""Maximum total number of connections"""

# API Server
DEFAULT_API_HOST = "0.0.0.0"  # noqa: S104
"""Default bind address for the HTTP API"""

DEFAULT_API_PORT = 8080
"""Default port for the HTTP API"""


__all__ = [
    "BUILDER_EXTRA_DATA_MARKER",
    "DEFAULT_API_HOST",
    "DEFAULT_API_PORT",
    "DECIMAL_PRECISION",
    "DEFAULT_TIMEOUT",
    "HEAD_SLOT_ID",
    "MAX_ATTEMPTS",
    "MAX_CONNECTIONS",
    "MAX_KEEPALIVE_CONNECTIONS",
    "RETRY_BASE_DELAY",
    "RETRY_MAX_DELAY",
    "SLOTS_PER_EPOCH",
    "WEI_PER_ETH",
    "WEI_PER_GWEI",
]
