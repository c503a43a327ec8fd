"""Click integration for FlexDuration command-line parameters."""

from typing import Any

import click

from flexduration.duration import FlexDuration, FlexDurationError, format_duration


class FlexDurationParamType(click.ParamType):
    """Click parameter type that parses values such as `1w2d` into FlexDuration.

    Invalid values abort argument parsing with a usage error naming the
    offending value and the expected format.
    """

    name = "duration"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> FlexDuration:
        if isinstance(value, FlexDuration):
            return value
        try:
            return FlexDuration.parse(value)
        except FlexDurationError as e:
            self.fail(str(e), param, ctx)

    def __repr__(self) -> str:
        return "DURATION"


FLEX_DURATION = FlexDurationParamType()


def duration_to_arg(value: FlexDuration) -> str:
    """Render a duration as it would be passed on the command line."""
    return format_duration(value)


def duration_option(*param_decls: str, **kwargs: Any):
    """A `click.option` whose value is parsed as a FlexDuration.

    A FlexDuration default is shown in help in its canonical text form.
    """
    default = kwargs.get("default")
    if isinstance(default, FlexDuration) and kwargs.get("show_default") is True:
        kwargs["show_default"] = duration_to_arg(default) or "0s"
    return click.option(*param_decls, type=FLEX_DURATION, **kwargs)


def duration_argument(*param_decls: str, **kwargs: Any):
    """A `click.argument` whose value is parsed as a FlexDuration."""
    return click.argument(*param_decls, type=FLEX_DURATION, **kwargs)
