"""Domain models - pure Python dataclasses representing pricing values"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LineItem:
    """One priced deliverable occurrence, with aliases and defaults already resolved"""

    base_points: float
    quantity: float = 1
    complexity_score: float = 1.0

    @property
    def effective_points(self) -> float:
        return self.base_points * self.quantity * self.complexity_score


@dataclass(frozen=True)
class PricingResult:
    """Aggregate output of the pricing engine"""

    price: float
    hours: float
    points: float


@dataclass(frozen=True)
class AdjustedLine:
    """Per-item override written back onto a sprint junction row"""

    complexity_score: float
    custom_estimate_points: float
    custom_hours: float


@dataclass(frozen=True)
class PackageQuote:
    """Calculated package totals compared against stored flat values"""

    calculated: PricingResult
    stored_flat_fee: Optional[float]
    stored_flat_hours: Optional[float]
    final_price: float
    final_hours: float
    price_match: bool
    hours_match: bool
