"""
Validation of mentor service price lists.

A price list is accepted or rejected as a whole: every item is checked
before anything is written, and the first problem found is reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..core.constants import MAX_SERVICE_NAME_LENGTH
from ..core.exceptions import PricingValidationException

# Wire (camelCase) names accepted next to the attribute names
_KEY_ALIASES: Dict[str, Sequence[str]] = {
    "service_name": ("service_name", "serviceName", "mentorshipService"),
    "mentor_price": ("mentor_price", "mentorPrice", "mentorSessionPrice"),
    "platform_fee": ("platform_fee", "platformFee"),
    "taxes_fee": ("taxes_fee", "taxesFee"),
    "total_price": ("total_price", "totalPrice"),
}


@dataclass(frozen=True)
class ServicePrice:
    """One validated price row; ``total_price`` is always the sum of the parts."""

    service_name: str
    mentor_price: int
    platform_fee: int
    taxes_fee: int
    total_price: int

    def to_row(self) -> Dict[str, Any]:
        return {
            "service_name": self.service_name,
            "mentor_price": self.mentor_price,
            "platform_fee": self.platform_fee,
            "taxes_fee": self.taxes_fee,
            "total_price": self.total_price,
        }


def _lookup(item: Any, field: str) -> Any:
    if isinstance(item, Mapping):
        for key in _KEY_ALIASES[field]:
            if key in item:
                return item[key]
        return None
    return getattr(item, field, None)


def _is_number(value: Any) -> bool:
    # bool is an int subclass; True is not a price
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_whole(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def validate_service_item(item: Any, index: Optional[int] = None) -> ServicePrice:
    """
    Validate a single price row.

    Checks, in order: the name, each amount's sign, that all amounts are
    whole numbers, and finally that the total is the sum of the parts.

    Raises:
        PricingValidationException: describing the first problem
    """
    name = _lookup(item, "service_name")
    mentor_price = _lookup(item, "mentor_price")
    platform_fee = _lookup(item, "platform_fee")
    taxes_fee = _lookup(item, "taxes_fee")
    total_price = _lookup(item, "total_price")

    if not isinstance(name, str) or not name.strip():
        raise PricingValidationException(
            "Each service must have a valid mentorship service name", index=index
        )
    if len(name.strip()) > MAX_SERVICE_NAME_LENGTH:
        raise PricingValidationException(
            f"Service name must be at most {MAX_SERVICE_NAME_LENGTH} characters", index=index
        )
    if not _is_number(mentor_price) or mentor_price <= 0:
        raise PricingValidationException(
            "Each service must have a valid mentor session price (positive integer)", index=index
        )
    if not _is_number(platform_fee) or platform_fee < 0:
        raise PricingValidationException(
            "Each service must have a valid platform fee (non-negative integer)", index=index
        )
    if not _is_number(taxes_fee) or taxes_fee < 0:
        raise PricingValidationException(
            "Each service must have a valid taxes fee (non-negative integer)", index=index
        )
    if not _is_number(total_price) or total_price <= 0:
        raise PricingValidationException(
            "Each service must have a valid total price (positive integer)", index=index
        )
    if not all(_is_whole(v) for v in (mentor_price, platform_fee, taxes_fee, total_price)):
        raise PricingValidationException(
            "All prices must be whole numbers (no decimals)", index=index
        )

    mentor_price, platform_fee, taxes_fee, total_price = (
        int(v) for v in (mentor_price, platform_fee, taxes_fee, total_price)
    )
    expected = mentor_price + platform_fee + taxes_fee
    if total_price != expected:
        raise PricingValidationException(
            f"Total price mismatch. Expected {expected}, got {total_price}", index=index
        )

    return ServicePrice(name.strip(), mentor_price, platform_fee, taxes_fee, total_price)


def validate_service_list(items: Any) -> List[ServicePrice]:
    """
    Validate a full replacement list.

    Raises:
        PricingValidationException: if ``items`` is not a list, an item is
            invalid, or two items share a name
    """
    if not isinstance(items, (list, tuple)):
        raise PricingValidationException("Services must be an array")

    prices: List[ServicePrice] = []
    seen: Dict[str, int] = {}
    for index, item in enumerate(items):
        price = validate_service_item(item, index=index)
        if price.service_name in seen:
            raise PricingValidationException(
                f"Duplicate service name: {price.service_name}", index=index
            )
        seen[price.service_name] = index
        prices.append(price)
    return prices
