"""flexduration - compact durations such as `1w6d23h49m59s`."""

# Core value type
from flexduration.duration import (
    EXPECTED_FORMAT,
    FlexDuration,
    FlexDurationError,
    InvalidFormatError,
    OutOfRangeError,
    format_duration,
    parse_duration,
)

# Serialization boundary
from flexduration.serialization import duration_from_str, duration_to_str

__all__ = [
    # Core functionality
    "FlexDuration",
    "parse_duration",
    "format_duration",
    "EXPECTED_FORMAT",
    # Errors
    "FlexDurationError",
    "InvalidFormatError",
    "OutOfRangeError",
    # Serialization
    "duration_from_str",
    "duration_to_str",
]
