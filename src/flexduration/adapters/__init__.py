"""Adapters for using FlexDuration with other frameworks."""

from .cli import FLEX_DURATION, FlexDurationParamType, duration_argument, duration_option

__all__ = ["FLEX_DURATION", "FlexDurationParamType", "duration_argument", "duration_option"]
