"""Wire tags, string thresholds and decode limits."""

# Tag bytes, one per value case
TAG_SIMPLE_STRING = b"+"
TAG_SIMPLE_ERROR = b"-"
TAG_INTEGER = b":"
TAG_FLOAT = b","
TAG_BULK_STRING = b"$"
TAG_VERBATIM_STRING = b"="
TAG_ARRAY = b"*"
TAG_BOOLEAN = b"#"
TAG_MAP = b"%"
TAG_BLOB_ERROR = b"!"
TAG_NULL = b"_"

CRLF = b"\r\n"

# Strings up to this many UTF-8 bytes go out as Simple Strings
SIMPLE_STRING_MAX_BYTES = 16
# Same threshold for string elements of a heterogeneous sequence
MIXED_SIMPLE_STRING_MAX_BYTES = 12

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

# These prevent unbounded allocation from malicious/malformed data
MAX_BULK_LENGTH = 512 * 1024 * 1024   # 512 MiB per payload
MAX_AGGREGATE_LENGTH = 2**32 - 1      # elements in one array / map
MAX_NESTING_DEPTH = 100               # nested arrays and maps
