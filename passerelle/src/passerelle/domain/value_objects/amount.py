"""
Amount helpers - parsing, base-unit conversion and bridge fees.
"""

from decimal import (
    ROUND_DOWN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    InvalidOperation,
    localcontext,
)

from passerelle.domain.exceptions import InvalidAmountError

FEE_RATE = Decimal("0.003")
FEE_QUANTUM = Decimal("0.0001")
MAX_BASE_UNITS = 2**64 - 1
U64_DIGITS = len(str(MAX_BASE_UNITS))

# Wide enough for any amount the ledger columns can hold
AMOUNT_CONTEXT = Context(prec=96)


def parse_amount(raw: object) -> Decimal:
    """
    Parse a user-supplied amount into a positive Decimal.

    Args:
        raw: str, int, float or Decimal from the UI/CLI

    Returns:
        Positive, finite Decimal

    Raises:
        InvalidAmountError: If the value is non-numeric, not finite or <= 0
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidAmountError(raw)

    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(raw)

    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(raw)

    return value


def to_base_units(amount: Decimal, decimals: int) -> int:
    """
    Convert a decimal amount into integer base units, rounding down.

    Raises:
        InvalidAmountError: If the result is zero or overflows a u64
    """
    # Anything at or above 10**20 base units cannot fit a u64
    if amount.adjusted() + decimals >= U64_DIGITS:
        raise InvalidAmountError(amount, reason="Amount exceeds the chain's maximum")

    try:
        with localcontext(AMOUNT_CONTEXT):
            scaled = (amount * (Decimal(10) ** decimals)).quantize(
                Decimal("1"), rounding=ROUND_DOWN
            )
    except InvalidOperation:
        raise InvalidAmountError(amount, reason="Amount exceeds the chain's maximum")

    units = int(scaled)

    if units <= 0:
        raise InvalidAmountError(amount, reason="Amount is below the smallest unit")

    if units > MAX_BASE_UNITS:
        raise InvalidAmountError(amount, reason="Amount exceeds the chain's maximum")

    return units


def compute_fee(amount: Decimal, rate: Decimal = FEE_RATE) -> Decimal:
    """
    Bridge fee, rounded half-up to 4 decimal places.

    Raises:
        InvalidAmountError: If the fee cannot be represented at 4 places
    """
    try:
        with localcontext(AMOUNT_CONTEXT):
            return (amount * rate).quantize(FEE_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmountError(amount, reason="Amount is too large")
