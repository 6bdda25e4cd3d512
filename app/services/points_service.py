"""Point rules for processed receipts.

Every rule is a small function of the receipt returning the points it
contributes. score_receipt() runs all of them; calculate_points() sums the
result. Money is handled as Decimal throughout so the cent-level rules are
exact, whatever the length of the amount.
"""
import logging
from contextlib import contextmanager
from datetime import date, datetime, time
from decimal import (
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    ROUND_CEILING,
    ROUND_HALF_EVEN,
    localcontext,
)
from typing import Callable, Dict, Iterator, List, Tuple

from app.schemas.receipt import ReceiptBase
from app.utils.receipt_validation import is_amount, is_clock_time, is_iso_date

logger = logging.getLogger(__name__)

QUARTER = Decimal("0.25")
ITEM_PRICE_MULTIPLIER = Decimal("0.2")
HIGH_TOTAL_THRESHOLD = Decimal("10.00")
AFTERNOON_START = time(14, 0)
AFTERNOON_END = time(16, 0)
DEFAULT_PRECISION = 28


class CalculationError(ValueError):
    """The receipt passed validation but a field could not be interpreted."""


class InvalidAmountError(CalculationError):
    """A monetary field is not a non-negative amount with two decimals."""


@contextmanager
def exact_arithmetic(field_name: str, *values: str) -> Iterator[None]:
    """
    Run Decimal arithmetic on the given amounts without rounding.

    Precision grows with the longest amount so products and remainders stay
    exact; any result that would still need rounding is trapped and reported
    as InvalidAmountError instead of being silently rounded.
    """
    longest = max((len(v) for v in values), default=0)
    ctx = Context(
        prec=max(DEFAULT_PRECISION, 2 * longest + 2),
        rounding=ROUND_HALF_EVEN,
        traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
    )
    try:
        with localcontext(ctx):
            yield
    except DecimalException as e:
        raise InvalidAmountError(f"{field_name}: amount cannot be computed exactly") from e


def parse_amount(value: str, field_name: str) -> Decimal:
    if not is_amount(value):
        raise InvalidAmountError(f"{field_name}: invalid amount {value!r}")
    try:
        return Decimal(value)
    except InvalidOperation as e:
        raise InvalidAmountError(f"{field_name}: invalid amount {value!r}") from e


def parse_purchase_date(value: str) -> date:
    if not is_iso_date(value):
        raise CalculationError(f"purchaseDate: invalid date {value!r}")
    return date.fromisoformat(value)


def parse_purchase_time(value: str) -> time:
    if not is_clock_time(value):
        raise CalculationError(f"purchaseTime: invalid time {value!r}")
    return datetime.strptime(value, "%H:%M").time()


def retailer_name_points(receipt: ReceiptBase) -> int:
    # letters and decimal digits only; spaces, '-', '&' and '_' don't count
    return sum(1 for ch in receipt.retailer if ch.isalpha() or ch.isdecimal())


def round_dollar_points(receipt: ReceiptBase) -> int:
    total = parse_amount(receipt.total, "total")
    with exact_arithmetic("total", receipt.total):
        return 50 if total % 1 == 0 else 0


def quarter_multiple_points(receipt: ReceiptBase) -> int:
    total = parse_amount(receipt.total, "total")
    with exact_arithmetic("total", receipt.total):
        return 25 if total % QUARTER == 0 else 0


def item_pair_points(receipt: ReceiptBase) -> int:
    return 5 * (len(receipt.items) // 2)


def description_length_points(receipt: ReceiptBase) -> int:
    points = 0
    for index, item in enumerate(receipt.items):
        field_name = f"items[{index}].price"
        price = parse_amount(item.price, field_name)
        length = len(item.shortDescription.strip())
        if length and length % 3 == 0:
            with exact_arithmetic(field_name, item.price):
                bonus = (price * ITEM_PRICE_MULTIPLIER).to_integral_value(rounding=ROUND_CEILING)
            points += int(bonus)
    return points


def high_total_points(receipt: ReceiptBase) -> int:
    total = parse_amount(receipt.total, "total")
    with exact_arithmetic("total", receipt.total):
        return 5 if total > HIGH_TOTAL_THRESHOLD else 0


def odd_day_points(receipt: ReceiptBase) -> int:
    return 6 if parse_purchase_date(receipt.purchaseDate).day % 2 == 1 else 0


def afternoon_points(receipt: ReceiptBase) -> int:
    purchased_at = parse_purchase_time(receipt.purchaseTime)
    return 10 if AFTERNOON_START < purchased_at < AFTERNOON_END else 0


RULES: List[Tuple[str, Callable[[ReceiptBase], int]]] = [
    ("retailer_name", retailer_name_points),
    ("round_dollar", round_dollar_points),
    ("quarter_multiple", quarter_multiple_points),
    ("item_pairs", item_pair_points),
    ("description_length", description_length_points),
    ("high_total", high_total_points),
    ("odd_day", odd_day_points),
    ("afternoon", afternoon_points),
]


def score_receipt(receipt: ReceiptBase) -> Dict[str, int]:
    """
    Apply every rule to the receipt.

    :param receipt: a receipt that has passed validation
    :return: rule name -> points contributed, in rule order
    :raises CalculationError: if an amount, date or time cannot be parsed
    """
    return {name: rule(receipt) for name, rule in RULES}


def calculate_points(receipt: ReceiptBase) -> int:
    breakdown = score_receipt(receipt)
    points = sum(breakdown.values())
    logger.debug("Points for %r: %d %s", receipt.retailer, points, breakdown)
    return points
