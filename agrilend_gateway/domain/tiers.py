"""Declarative tier tables shared by scoring factors, risk tiers, rates and verdicts"""

import operator
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional, Tuple, TypeVar

from agrilend_gateway.domain.models import FactorContribution, ScoringInput

T = TypeVar("T")

_COMPARATORS = {
    ">=": operator.ge,
    ">": operator.gt,
    "<=": operator.le,
    "<": operator.lt,
}


@dataclass(frozen=True)
class Band(Generic[T]):
    """A threshold and the value selected when the comparison holds"""

    threshold: float
    value: T


@dataclass(frozen=True)
class ThresholdTable(Generic[T]):
    """
    Ordered bands evaluated top to bottom; the first matching band wins.

    Thresholds must be strictly descending for ">=" / ">" and strictly
    ascending for "<=" / "<", so bands never overlap and a larger (or
    smaller) input can only move to a later band.
    """

    bands: Tuple[Band[T], ...]
    otherwise: T
    comparison: str = ">="

    def __post_init__(self) -> None:
        if self.comparison not in _COMPARATORS:
            raise ValueError(f"Unsupported comparison: {self.comparison!r}")

        thresholds = [band.threshold for band in self.bands]
        descending = self.comparison in (">=", ">")
        for previous, current in zip(thresholds, thresholds[1:]):
            if descending and not current < previous:
                raise ValueError(f"Thresholds must be strictly descending: {thresholds}")
            if not descending and not current > previous:
                raise ValueError(f"Thresholds must be strictly ascending: {thresholds}")

    def lookup(self, measure: float) -> T:
        compare = _COMPARATORS[self.comparison]
        for band in self.bands:
            if compare(measure, band.threshold):
                return band.value
        return self.otherwise


def table(comparison: str, *bands: Tuple[float, T], otherwise: T) -> ThresholdTable[T]:
    """Shorthand for building a ThresholdTable from (threshold, value) pairs"""
    return ThresholdTable(
        bands=tuple(Band(threshold, value) for threshold, value in bands),
        otherwise=otherwise,
        comparison=comparison,
    )


@dataclass(frozen=True)
class Effect:
    """Score delta for a band plus the text shown when that band applies"""

    delta: int
    narration: Optional[str] = None
    flag: Optional[str] = None  # underwriting red flag label


NEUTRAL = Effect(0)


@dataclass(frozen=True)
class ThresholdFactor:
    """Numeric factor scored through a ThresholdTable of Effects"""

    name: str
    measure: Callable[[ScoringInput], float]
    bands: ThresholdTable[Effect]

    def evaluate(self, scoring_input: ScoringInput) -> FactorContribution:
        value = self.measure(scoring_input)
        effect = self.bands.lookup(value)
        return FactorContribution(
            name=self.name,
            value=value,
            delta=effect.delta,
            narration=effect.narration,
            flag=effect.flag,
        )


@dataclass(frozen=True)
class CategoricalFactor:
    """Factor keyed on a discrete value; unknown values take the default effect"""

    name: str
    measure: Callable[[ScoringInput], Any]
    effects: Mapping[Any, Effect]
    default: Effect = field(default=NEUTRAL)

    def evaluate(self, scoring_input: ScoringInput) -> FactorContribution:
        value = self.measure(scoring_input)
        effect = self.effects.get(value, self.default)
        return FactorContribution(
            name=self.name,
            value=value,
            delta=effect.delta,
            narration=effect.narration,
            flag=effect.flag,
        )
