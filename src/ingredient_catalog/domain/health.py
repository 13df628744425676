"""Health score domain models."""

from dataclasses import dataclass
from typing import Literal

HealthCategory = Literal[
    "whole", "minimally_processed", "healthy_processed", "heavily_processed"
]


@dataclass(frozen=True)
class HealthFactors:
    """Boolean signals that contributed to a health score."""

    is_whole_food: bool = False
    has_short_ingredient_list: bool = False
    no_additives: bool = True
    good_macro_profile: bool = False


@dataclass(frozen=True)
class HealthScore:
    """A 0-100 processing score with its derived category."""

    score: int
    category: HealthCategory
    factors: HealthFactors
