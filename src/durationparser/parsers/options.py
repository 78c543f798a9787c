"""Configuration model for the duration parser."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import InvalidConfigurationError
from .units import Unit

__all__ = ["ParserOptions", "check_options"]


class ParserOptions(BaseModel):
    """Immutable settings shared by every parse call.

    ``uncoloned_default`` and ``coloned_default`` are only applied to the first
    number in the text; :attr:`Unit.NONE` means "no default", so a bare number
    is an unresolved unit.
    """

    uncoloned_default: Unit = Field(default=Unit.NONE, description="Unit of a leading number without suffix")
    coloned_default: Unit = Field(default=Unit.HOURS, description="Unit of a leading colon run without suffix")
    decimal_separator: str = Field(default=".", description="Locale decimal separator")
    group_separator: str = Field(default=",", description="Locale thousands separator")
    allow_thousands_separator: bool = False
    allow_dot_day_hour_separator: bool = Field(
        default=True, description="Read '1.08:18:10' as 1 day 8 hours 18 minutes 10 seconds"
    )
    fail_on_unitless_number: bool = True

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("uncoloned_default", "coloned_default", mode="before")
    @classmethod
    def _coerce_unit(cls, value: Any) -> Unit:
        return Unit.coerce(value)

    @field_validator("uncoloned_default", "coloned_default")
    @classmethod
    def _default_not_error(cls, value: Unit) -> Unit:
        if value.is_error:
            raise ValueError(f"{value.name} cannot be used as a default unit")
        return value

    @field_validator("decimal_separator", "group_separator")
    @classmethod
    def _separator_format(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("separators must be a single character")
        if value.isdigit() or value in ":+-eE":
            raise ValueError(f"{value!r} cannot be used as a separator")
        return value

    @model_validator(mode="after")
    def _distinct_separators(self) -> "ParserOptions":
        if self.allow_thousands_separator and self.decimal_separator == self.group_separator:
            raise ValueError("decimal and group separators must differ")
        return self

    @property
    def decimal_characters(self) -> str:
        """Characters accepted between integer and fractional digits."""

        if self.allow_dot_day_hour_separator and self.decimal_separator != ".":
            return self.decimal_separator + "."
        return self.decimal_separator

    def default_for(self, coloned: bool) -> Unit:
        return self.coloned_default if coloned else self.uncoloned_default


def check_options(options: ParserOptions) -> ParserOptions:
    """Re-validate ``options`` before parsing.

    Models created with ``model_construct`` skip pydantic validation; this
    catches them at parse start and reports :class:`InvalidConfigurationError`.
    """

    if not isinstance(options, ParserOptions):
        raise InvalidConfigurationError(f"Expected ParserOptions, got {type(options).__name__}")
    try:
        ParserOptions.model_validate(options.model_dump())
    except (ValidationError, ValueError) as exc:
        raise InvalidConfigurationError(str(exc)) from exc
    return options
