"""Domain models and types for tillcount.

This package contains the functional core:
- Pure functions and a plain in-memory model
- No I/O operations
- Easy to test
- Arithmetic separated from presentation
"""

from tillcount.domain.models import DEFAULT_DENOMINATIONS, Denomination, DenominationId
from tillcount.domain.money import format_currency, to_decimal
from tillcount.domain.tally import TallyModel, UnknownDenominationError, parse_count

__all__ = [
    "DEFAULT_DENOMINATIONS",
    "Denomination",
    "DenominationId",
    "TallyModel",
    "UnknownDenominationError",
    "format_currency",
    "parse_count",
    "to_decimal",
]
