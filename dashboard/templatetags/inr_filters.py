"""
Indian rupee template filters.

Usage in templates:
    {% load inr_filters %}
    {{ 1234567.5|inr }}        → "₹12,34,567.50"
    {{ 1234567.5|inr:0 }}      → "₹12,34,568"
    {{ 1770|inr_words }}       → "Rupees One Thousand Seven Hundred Seventy Only"
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django import template

register = template.Library()

ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# Indian scale: crore = 10^7, lakh = 10^5
SCALES = [(10_000_000, "Crore"), (100_000, "Lakh"), (1_000, "Thousand"), (100, "Hundred")]


def _to_decimal(value):
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


def _group_indian(digits):
    """'1234567' → '12,34,567': last three digits, then pairs."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


@register.filter
def inr(value, decimals=2):
    """Format a number as rupees with Indian digit grouping."""
    amount = _to_decimal(value)
    if amount is None:
        return value
    decimals = int(decimals)
    quantum = Decimal(1).scaleb(-decimals)
    amount = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integer, _, fraction = f"{abs(amount):f}".partition(".")
    result = f"{sign}₹{_group_indian(integer)}"
    if decimals > 0:
        result += f".{fraction}"
    return result


def _number_to_words(n):
    if n == 0:
        return ""
    if n < 20:
        return ONES[n]
    if n < 100:
        return " ".join(word for word in (TENS[n // 10], ONES[n % 10]) if word)

    parts = []
    for scale, name in SCALES:
        if n >= scale:
            parts.append(f"{_number_to_words(n // scale)} {name}")
            n %= scale
    if n:
        parts.append(_number_to_words(n))
    return " ".join(parts)


@register.filter
def inr_words(value):
    """
    Amount in words using lakh and crore.

    Examples:
        0         → "Rupees Zero Only"
        250000.5  → "Rupees Two Lakh Fifty Thousand and Fifty Paise Only"
    """
    amount = _to_decimal(value)
    if amount is None:
        return str(value)
    if amount < 0:
        return "Minus " + inr_words(-amount)

    amount = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    rupees = int(amount)
    paise = int((amount - rupees) * 100)

    result = "Rupees " + (_number_to_words(rupees) or "Zero")
    if paise:
        result += f" and {_number_to_words(paise)} Paise"
    return result + " Only"
