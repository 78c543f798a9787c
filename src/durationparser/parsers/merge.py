"""Fold a token stream into one or more durations."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import ROUND_HALF_EVEN, Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import ErrorKind, MalformedNumberError, TokenError
from .options import ParserOptions
from .tokens import Contribution, RejectedToken, Token
from .units import Unit

__all__ = ["Accumulator", "MergeOutcome", "MergeStep", "MergeEngine", "ParseResult", "merge_token"]

LOGGER = logging.getLogger(__name__)

_MAX_SECONDS = Decimal(timedelta.max.days + 1) * 86400
_MICROSECONDS = Decimal(1_000_000)


class MergeOutcome(Enum):
    MERGED = "merged"
    SEAL = "seal"
    REJECT = "reject"


@dataclass
class Accumulator:
    """Per-unit contributions of the duration being built."""

    parts: Dict[Unit, Decimal] = field(default_factory=dict)
    negative: bool = False
    raw: List[str] = field(default_factory=list)

    @property
    def finest(self) -> Optional[Unit]:
        return max(self.parts) if self.parts else None

    def accepts(self, contributions: Sequence[Contribution]) -> bool:
        """True if every unit of ``contributions`` is finer than anything held."""

        finest = self.finest
        if finest is None or not contributions:
            return True
        return min(unit for unit, _ in contributions) > finest

    def absorb(self, token: Token, contributions: Sequence[Contribution]) -> None:
        if not self.raw:
            self.negative = bool(getattr(token, "negative", False))
        flip = self.negative and not getattr(token, "explicit_sign", False)
        for unit, value in contributions:
            self.parts[unit] = value.copy_negate() if flip else value
        self.raw.append(token.raw)

    def seal(self) -> timedelta:
        """Convert the exact contributions into a :class:`~datetime.timedelta`.

        Sub-microsecond parts are kept exactly until this final rounding
        (half to even).
        """

        try:
            total = sum((value * unit.seconds for unit, value in self.parts.items()), Decimal(0))
            if abs(total) >= _MAX_SECONDS:
                raise OverflowError("duration out of range")
            micros = (total * _MICROSECONDS).to_integral_value(rounding=ROUND_HALF_EVEN)
            return timedelta(microseconds=int(micros))
        except (ArithmeticError, OverflowError) as exc:
            raise MalformedNumberError(f"Duration out of range: {' '.join(self.raw)!r}") from exc


@dataclass(frozen=True)
class MergeStep:
    """Outcome of offering one token to the current accumulator."""

    outcome: MergeOutcome
    contributions: Tuple[Contribution, ...] = ()
    error: Optional[TokenError] = None
    dropped: bool = False


def _reject(token: Token, kind: ErrorKind, message: str) -> MergeStep:
    return MergeStep(MergeOutcome.REJECT, error=TokenError(kind=kind, raw=token.raw, message=message))


def merge_token(accumulator: Optional[Accumulator], token: Token, options: ParserOptions) -> MergeStep:
    """Decide what ``token`` does to ``accumulator`` without mutating it.

    ``MERGED``: the contributions extend the accumulator. ``SEAL``: the token
    reuses or goes back to a unit already consumed, so it starts a new
    duration. ``REJECT``: the token carries an error (or has no usable unit);
    ``dropped`` marks a unitless number silently discarded because
    ``fail_on_unitless_number`` is off and there is no default to fall back to.
    """

    if isinstance(token, RejectedToken):
        return _reject(token, token.kind, token.message)

    unit = token.unit
    if unit is Unit.NONE:
        if options.fail_on_unitless_number:
            return _reject(token, ErrorKind.UNRESOLVED_UNIT, "number without a unit")
        unit = options.default_for(token.coloned)
        if unit is Unit.NONE:
            step = _reject(token, ErrorKind.UNRESOLVED_UNIT, "number without a unit")
            return MergeStep(step.outcome, error=step.error, dropped=True)

    laid_out = token.layout(unit)
    if isinstance(laid_out, ErrorKind):
        return _reject(token, laid_out, f"cannot lay out {token.raw!r} from {unit.name.lower()}")

    for part_unit, value in laid_out:
        if part_unit.is_zero_only and value != 0:
            return _reject(token, ErrorKind.AMBIGUOUS_UNIT, f"{part_unit.name.lower()} must be zero")

    contributions = tuple(laid_out)
    if accumulator is None or accumulator.accepts(contributions):
        return MergeStep(MergeOutcome.MERGED, contributions=contributions)
    return MergeStep(MergeOutcome.SEAL, contributions=contributions)


@dataclass(frozen=True)
class ParseResult:
    """Durations found in a text, in input order, plus what went wrong."""

    success: bool
    durations: Tuple[timedelta, ...] = ()
    errors: Tuple[TokenError, ...] = ()

    @property
    def first(self) -> Optional[timedelta]:
        return self.durations[0] if self.durations else None


class MergeEngine:
    """Left-to-right fold of tokens into sealed durations.

    Once ``max_results`` durations are sealed the engine stops pulling tokens,
    so nothing after that point is scanned or validated.
    """

    def __init__(self, options: ParserOptions, max_results: Optional[int] = None) -> None:
        self._options = options
        self._max_results = max_results
        self._durations: List[timedelta] = []
        self._errors: List[TokenError] = []
        self._current: Optional[Accumulator] = None

    def _full(self) -> bool:
        return self._max_results is not None and len(self._durations) >= self._max_results

    def _seal(self) -> bool:
        """Close the current accumulator; return True when the result list is full."""

        current, self._current = self._current, None
        if current is not None:
            try:
                duration = current.seal()
            except MalformedNumberError as exc:
                LOGGER.debug(
                    "duration.overflow",
                    extra={"event": "duration.overflow", "extra_fields": {"raw": " ".join(current.raw)}},
                )
                self._errors.append(
                    TokenError(kind=ErrorKind.MALFORMED_NUMBER, raw=" ".join(current.raw), message=str(exc))
                )
            else:
                LOGGER.debug(
                    "duration.sealed",
                    extra={
                        "event": "duration.sealed",
                        "extra_fields": {"raw": " ".join(current.raw), "seconds": duration.total_seconds()},
                    },
                )
                self._durations.append(duration)
        return self._full()

    def _start(self, token: Token, contributions: Sequence[Contribution]) -> None:
        self._current = Accumulator()
        self._current.absorb(token, contributions)

    def run(self, tokens: Iterable[Token]) -> ParseResult:
        for token in tokens:
            step = merge_token(self._current, token, self._options)
            if step.outcome is MergeOutcome.REJECT:
                assert step.error is not None
                LOGGER.debug(
                    "token.rejected",
                    extra={
                        "event": "token.rejected",
                        "extra_fields": {
                            "raw": step.error.raw,
                            "kind": step.error.kind.value,
                            "dropped": step.dropped,
                        },
                    },
                )
                self._errors.append(step.error)
                if self._seal():
                    break
            elif step.outcome is MergeOutcome.SEAL:
                if self._seal():
                    break
                self._start(token, step.contributions)
            elif self._current is None:
                self._start(token, step.contributions)
            else:
                self._current.absorb(token, step.contributions)
        else:
            self._seal()

        success = not (self._options.fail_on_unitless_number and self._errors)
        return ParseResult(success=success, durations=tuple(self._durations), errors=tuple(self._errors))
