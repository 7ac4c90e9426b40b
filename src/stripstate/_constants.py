"""Internal constants shared across the library."""

# Strip marker delimiters. These are process-wide: markers minted anywhere
# in a pipeline must be recognisable by every StripState.
MARKER_PREFIX = "\x7f'\"`UNIQ-"
MARKER_SUFFIX = "-QINU`\"'\x7f"

# Characters that may never appear inside a marker identifier. They are the
# characters the markup pipeline treats specially (plus the delimiter byte).
RESERVED_IDENTIFIER_CHARS: frozenset[str] = frozenset("\x7f<>&'\"")

UNSTRIP_RECURSION_LIMIT = 20
# Each nesting level costs about four interpreter frames; stay far below
# the default interpreter recursion limit of 1000.
MAX_UNSTRIP_RECURSION_LIMIT = 100
MERGE_TAG_LENGTH = 16
ERROR_CLASS = "error"
