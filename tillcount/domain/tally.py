"""Cash drawer tally model.

This module contains the functional core for counting a till:
- No I/O operations (no console, no files)
- Derived totals recomputed on every read
- Exact decimal arithmetic for all money values

Malformed input is coerced to zero rather than rejected; the input fields
this model backs are forgiving by nature.
"""

from collections.abc import Callable, Iterable
from decimal import Decimal

from tillcount.domain.models import DEFAULT_DENOMINATIONS, Denomination, DenominationId

DEFAULT_FLOAT_AMOUNT = Decimal(300)

# Counts above a signed 64-bit integer are treated as unparseable
MAX_COUNT = 2**63 - 1

Observer = Callable[[], None]


class UnknownDenominationError(KeyError):
    """Raised when a denomination is not part of the tally's fixed list."""


def parse_count(raw: str) -> int:
    """Parse a count from free-form text input.

    Every character other than 0-9 is discarded, so signs, decimal points
    and non-ASCII digits never survive (e.g., "-5" -> 5, "3a2" -> 32).

    Args:
        raw: Text as typed by the user.

    Returns:
        Non-negative count, or 0 if nothing parseable remains.
    """
    digits = "".join(ch for ch in raw if ch.isascii() and ch.isdecimal())
    if not digits:
        return 0
    try:
        count = int(digits)
    except ValueError:
        # Exceeds the interpreter's integer string conversion limit
        return 0
    if count > MAX_COUNT:
        return 0
    return count


def quantity_input_text(quantity: int) -> str:
    """Text shown in a quantity field: blank for zero."""
    return "" if quantity == 0 else str(quantity)


def float_input_text(amount: Decimal) -> str:
    """Text shown in the float field: blank for zero."""
    if amount == 0:
        return ""
    return format(amount.normalize(), "f")


def next_denomination(
    order: tuple[Denomination, ...],
    current: Denomination | None,
) -> Denomination | None:
    """Find the field that should receive focus after the current one.

    Args:
        order: Denominations in display order.
        current: Currently focused denomination, or None if nothing is focused.

    Returns:
        Next denomination, the first one when nothing is focused, or None
        after the last field.
    """
    if current is None or current not in order:
        return order[0] if order else None
    idx = order.index(current)
    if idx + 1 < len(order):
        return order[idx + 1]
    return None


class TallyModel:
    """Quantities per denomination plus the float kept in the drawer.

    Observers registered with subscribe() are called synchronously after
    every mutation. The model is not thread-safe.
    """

    def __init__(
        self,
        denominations: Iterable[Denomination] = DEFAULT_DENOMINATIONS,
        float_amount: Decimal = DEFAULT_FLOAT_AMOUNT,
    ) -> None:
        self._denominations = tuple(denominations)
        self._by_id: dict[DenominationId, Denomination] = {}
        for denomination in self._denominations:
            if denomination.id in self._by_id:
                raise ValueError(f"Duplicate denomination id: {denomination.id}")
            self._by_id[denomination.id] = denomination
        if float_amount < 0:
            raise ValueError("Float amount must not be negative")

        self._quantities: dict[DenominationId, int] = {d.id: 0 for d in self._denominations}
        self._float_amount = Decimal(float_amount)
        self._observers: list[Observer] = []

    @property
    def denominations(self) -> tuple[Denomination, ...]:
        return self._denominations

    @property
    def float_amount(self) -> Decimal:
        return self._float_amount

    def bills(self) -> tuple[Denomination, ...]:
        return tuple(d for d in self._denominations if d.is_bill)

    def coins(self) -> tuple[Denomination, ...]:
        return tuple(d for d in self._denominations if not d.is_bill)

    def get(self, key: Denomination | str) -> Denomination:
        """Resolve a denomination or its id against the fixed list.

        Raises:
            UnknownDenominationError: If the denomination is not tracked.
        """
        denomination_id = key.id if isinstance(key, Denomination) else DenominationId(key)
        found = self._by_id.get(denomination_id)
        if found is None or (isinstance(key, Denomination) and found != key):
            raise UnknownDenominationError(denomination_id)
        return found

    def quantity(self, key: Denomination | str) -> int:
        return self._quantities[self.get(key).id]

    def quantities(self) -> dict[DenominationId, int]:
        return dict(self._quantities)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register a callback run after every mutation.

        Returns:
            Function that removes the observer again.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer()

    def set_quantity(self, key: Denomination | str, raw_input: str) -> None:
        """Set the count for one denomination from raw text input."""
        denomination = self.get(key)
        self._quantities[denomination.id] = parse_count(raw_input)
        self._notify()

    def set_float_amount(self, raw_input: str) -> None:
        """Set the float from raw text input (whole units only)."""
        self._float_amount = Decimal(parse_count(raw_input))
        self._notify()

    def reset_all(self) -> None:
        """Zero every count. The float is left as is."""
        for denomination_id in self._quantities:
            self._quantities[denomination_id] = 0
        self._notify()

    def subtotal(self, key: Denomination | str) -> Decimal:
        denomination = self.get(key)
        return self._quantities[denomination.id] * denomination.value

    def grand_total(self) -> Decimal:
        return sum((self.subtotal(d) for d in self._denominations), Decimal(0))

    def bank_amount(self) -> Decimal:
        """Counted cash above the float, never negative."""
        result = self.grand_total() - self._float_amount
        return result if result > 0 else Decimal(0)
