"""
settings.py

Default values shared across ahcodec.
"""


VERSION = 1

FILE_SIGNATURE = b"AHC"

# Order given to the root placeholder of a fresh tree. Every insertion
# consumes two orders below the current placeholder's order.
DEFAULT_INITIAL_ORDER = 512

DEFAULT_MAX_PROPAGATION_DEPTH = 100

DEFAULT_SYMBOL_WIDTH = 8
MAX_SYMBOL_WIDTH = 32

# Wide enough for every Unicode code point (0x10FFFF).
DEFAULT_TEXT_SYMBOL_WIDTH = 21
