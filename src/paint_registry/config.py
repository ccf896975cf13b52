"""
Default configuration for the paint registry service.

Every key can be overridden through ``create_app(config=...)`` or through an
environment variable carrying the ``PAINT_`` prefix (``PAINT_MAX_SUPPLY=16``
sets ``MAX_SUPPLY``). Environment values are parsed as JSON by Flask, so
numbers arrive as ints.
"""

ENV_PREFIX = "PAINT"

COLLECTION_NAME = "ThePaintProject"
COLLECTION_SYMBOL = "PAINT"
MAX_SUPPLY = 1024

DEFAULT_CONFIG = {
    # Collection identity
    "COLLECTION_NAME": COLLECTION_NAME,
    "COLLECTION_SYMBOL": COLLECTION_SYMBOL,

    # Hard cap on the number of tokens ever minted
    "MAX_SUPPLY": MAX_SUPPLY,

    # Logging
    "LOG_LEVEL": "INFO",
}
