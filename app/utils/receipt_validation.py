"""Receipt validation utilities."""
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List
from app.schemas.receipt import ItemBase, ReceiptBase


RETAILER_PATTERN = re.compile(r"^[\w\s\-&]+$", re.ASCII)
DESCRIPTION_PATTERN = re.compile(r"^[\w\s\-]+$", re.ASCII)
AMOUNT_PATTERN = re.compile(r"^[0-9]+\.[0-9]{2}$")
DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
TIME_PATTERN = re.compile(r"^[0-9]{2}:[0-9]{2}$")


@dataclass(frozen=True)
class Violation:
    field: str
    message: str


@dataclass
class ValidationResult:
    violations: List[Violation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def add(self, field_name: str, message: str) -> None:
        self.violations.append(Violation(field_name, message))


class ReceiptValidationError(Exception):
    """Raised when a submitted receipt fails validation."""

    def __init__(self, violations: List[Violation]):
        self.violations = violations
        super().__init__("; ".join(f"{v.field}: {v.message}" for v in violations))


def is_amount(value: str) -> bool:
    return AMOUNT_PATTERN.fullmatch(value) is not None


def is_iso_date(value: str) -> bool:
    if not DATE_PATTERN.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_clock_time(value: str) -> bool:
    if not TIME_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, "%H:%M")
    except ValueError:
        return False
    return True


def validate_items(items: List[ItemBase], result: ValidationResult) -> None:
    """
    Validate receipt items.

    Rules:
    - at least one item
    - shortDescription holds only ASCII letters, digits, underscores, whitespace and hyphens
    - price is a non-negative amount with exactly two decimal places
    """
    if not items:
        result.add("items", "receipt must contain at least one item")
        return

    for index, item in enumerate(items):
        if not DESCRIPTION_PATTERN.fullmatch(item.shortDescription):
            result.add(
                f"items[{index}].shortDescription",
                f"invalid description: {item.shortDescription!r}"
            )
        if not is_amount(item.price):
            result.add(
                f"items[{index}].price",
                f"price must look like '6.49', got {item.price!r}"
            )


def validate_receipt(receipt: ReceiptBase) -> ValidationResult:
    """
    Check a receipt against the field patterns.

    Returns a ValidationResult; nothing is raised here so callers can
    report every violation at once.
    """
    result = ValidationResult()

    if not RETAILER_PATTERN.fullmatch(receipt.retailer):
        result.add("retailer", f"invalid retailer name: {receipt.retailer!r}")

    if not is_iso_date(receipt.purchaseDate):
        result.add("purchaseDate", f"expected YYYY-MM-DD, got {receipt.purchaseDate!r}")

    if not is_clock_time(receipt.purchaseTime):
        result.add("purchaseTime", f"expected 24-hour HH:MM, got {receipt.purchaseTime!r}")

    validate_items(receipt.items, result)

    if not is_amount(receipt.total):
        result.add("total", f"total must look like '6.49', got {receipt.total!r}")

    return result


def ensure_valid(receipt: ReceiptBase) -> None:
    """Raise ReceiptValidationError if the receipt has any violations."""
    result = validate_receipt(receipt)
    if not result.is_valid:
        raise ReceiptValidationError(result.violations)
