"""Domain type definitions for tillcount.

These types provide semantic clarity and help with type checking:
- DenominationId: Stable key for a bill or coin (e.g., "20", "0.25")
- Denomination: A fixed currency unit with a label and exact value

All monetary values are decimal.Decimal to avoid floating point errors.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import NewType

# Stable denomination key, independent of object identity
DenominationId = NewType("DenominationId", str)

# Denominations worth at least this much are bills, the rest are coins
BILL_THRESHOLD = Decimal(5)


@dataclass(frozen=True)
class Denomination:
    """Immutable currency unit."""

    id: DenominationId
    label: str
    value: Decimal

    @property
    def is_bill(self) -> bool:
        return self.value >= BILL_THRESHOLD

    @property
    def kind(self) -> str:
        return "bill" if self.is_bill else "coin"


def _denomination(value: str) -> Denomination:
    amount = Decimal(value)
    label = f"${value}" if amount < 1 else f"${amount:,.0f}"
    return Denomination(id=DenominationId(value), label=label, value=amount)


# Bills descending, then coins descending
DEFAULT_DENOMINATIONS: tuple[Denomination, ...] = tuple(
    _denomination(v) for v in ("100", "50", "20", "10", "5", "2", "1", "0.25", "0.10", "0.05")
)
