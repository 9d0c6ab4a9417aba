"""
Alternative name specs.

An alternative is declared either by a plain name ("red") or by a
single-entry weighted mapping ({"red": 2}). The raw declaration is
resolved once, into PlainName or WeightedName, when the alternative is
built.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from splitstats.services.experiments.exceptions import InvalidAlternative

DEFAULT_WEIGHT = 1.0


@dataclass(frozen=True)
class PlainName:
    name: str

    @property
    def weight(self) -> float:
        return DEFAULT_WEIGHT


@dataclass(frozen=True)
class WeightedName:
    name: str
    weight: float


NameSpec = Union[PlainName, WeightedName]


def _parse_weight(value: Any) -> float:
    # bool is an int subclass but not a weight
    if isinstance(value, bool):
        raise InvalidAlternative(f"Alternative weight must be a number, got {value!r}")
    try:
        weight = float(value)
    except (TypeError, ValueError):
        raise InvalidAlternative(f"Alternative weight must be a number, got {value!r}") from None
    if not math.isfinite(weight):
        raise InvalidAlternative(f"Alternative weight must be finite, got {value!r}")
    return weight


def parse_alternative_name(raw: Any) -> NameSpec:
    """Resolve a raw alternative declaration.

    Raises:
        InvalidAlternative: if raw is not a non-empty string or a
            single-entry mapping of string name to numeric weight
    """
    if isinstance(raw, PlainName):
        return parse_alternative_name(raw.name)
    if isinstance(raw, WeightedName):
        return WeightedName(raw.name, _parse_weight(raw.weight))

    if isinstance(raw, str):
        if not raw:
            raise InvalidAlternative("Alternative must be a non-empty string")
        return PlainName(raw)

    if isinstance(raw, Mapping) and len(raw) == 1:
        name, value = next(iter(raw.items()))
        if isinstance(name, str):
            return WeightedName(name, _parse_weight(value))

    raise InvalidAlternative("Alternative must be a string or a {name: weight} mapping")


def validate_alternative_name(raw: Any) -> None:
    parse_alternative_name(raw)
