"""
Pydantic-based string boundary for flexduration.

`FlexDuration` encodes to its canonical text and decodes from text through
pydantic, so it can sit in any model or `TypeAdapter`.
"""

from pydantic import TypeAdapter

from flexduration.duration import FlexDuration

_DURATION_ADAPTER = TypeAdapter(FlexDuration)


def duration_from_str(text: str) -> FlexDuration:
    """Decode duration text through pydantic.

    Raises:
        pydantic.ValidationError: With error type `flex_duration`, carrying the
            offending text and the expected format.
    """
    return _DURATION_ADAPTER.validate_python(text)


def duration_to_str(value: FlexDuration) -> str:
    """Encode a duration to its canonical text."""
    return _DURATION_ADAPTER.dump_python(value, mode="json")
