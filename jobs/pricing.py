"""
Intake pricing — PPF and other-service price tables plus the quote formula.

The tables are wrapped in an immutable PriceBook built once from settings
(``GARAGE_PRICE_BOOK``) and handed to ``quote_service``; nothing mutates them
at runtime.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from types import MappingProxyType

from django.conf import settings

from core.exceptions import ValidationFailed

SMALL = "Small Cars"
HATCH = "Hatchback / Small Sedan"
MID = "Mid-size Sedan / Compact SUV / MUV"
SUV = "SUV / MPV"

VEHICLE_TYPES = (SMALL, HATCH, MID, SUV)

# Intake quotes always carry 18% GST; invoices use GARAGE_DEFAULT_TAX_RATE
INTAKE_GST_RATE = Decimal("18")

# category -> vehicle type -> warranty -> price (₹)
DEFAULT_PPF_PRICES = {
    "Elite": {
        SMALL: {"TPU 5 Years Gloss": 55000, "TPU 5 Years Matt": 60000, "TPU 7 Years Gloss": 80000, "TPU 10 Years Gloss": 95000},
        HATCH: {"TPU 5 Years Gloss": 60000, "TPU 5 Years Matt": 70000, "TPU 7 Years Gloss": 85000, "TPU 10 Years Gloss": 105000},
        MID: {"TPU 5 Years Gloss": 70000, "TPU 5 Years Matt": 75000, "TPU 7 Years Gloss": 90000, "TPU 10 Years Gloss": 112000},
        SUV: {"TPU 5 Years Gloss": 80000, "TPU 5 Years Matt": 85000, "TPU 7 Years Gloss": 95000, "TPU 10 Years Gloss": 120000},
    },
    "Garware Plus": {
        SMALL: {"TPU 5 Years Gloss": 62000},
        HATCH: {"TPU 5 Years Gloss": 65000},
        MID: {"TPU 5 Years Gloss": 70000},
        SUV: {"TPU 5 Years Gloss": 85000},
    },
    "Garware Premium": {
        SMALL: {"TPU 8 Years Gloss": 80000},
        HATCH: {"TPU 8 Years Gloss": 85000},
        MID: {"TPU 8 Years Gloss": 90000},
        SUV: {"TPU 8 Years Gloss": 95000},
    },
    "Garware Matt": {
        SMALL: {"TPU 5 Years Matt": 105000},
        HATCH: {"TPU 5 Years Matt": 110000},
        MID: {"TPU 5 Years Matt": 115000},
        SUV: {"TPU 5 Years Matt": 120000},
    },
}

# service name -> vehicle type -> price (₹)
DEFAULT_OTHER_SERVICE_PRICES = {
    "Foam Washing": {SMALL: 400, HATCH: 500, MID: 600, SUV: 700},
    "Premium Washing": {SMALL: 600, HATCH: 700, MID: 800, SUV: 900},
    "Interior Cleaning": {SMALL: 2500, HATCH: 3000, MID: 3500, SUV: 4500},
    "Interior Steam Cleaning": {SMALL: 3500, HATCH: 4000, MID: 4500, SUV: 5500},
    "Leather Treatment": {SMALL: 5000, HATCH: 5500, MID: 6000, SUV: 7000},
    "Detailing": {SMALL: 5000, HATCH: 6500, MID: 7000, SUV: 9000},
    "Paint Sealant Coating (Teflon)": {SMALL: 6500, HATCH: 8500, MID: 9500, SUV: 11500},
    "Ceramic Coating – 9H": {SMALL: 11000, HATCH: 12500, MID: 15000, SUV: 18000},
    "Ceramic Coating – MAFRA": {SMALL: 12500, HATCH: 15000, MID: 18000, SUV: 21000},
    "Ceramic Coating – MENZA PRO": {SMALL: 15000, HATCH: 18000, MID: 21000, SUV: 24000},
    "Ceramic Coating – KOCH CHEMIE": {SMALL: 18000, HATCH: 22000, MID: 25000, SUV: 28000},
    "Corrosion Treatment": {SMALL: 3500, HATCH: 5000, MID: 6000, SUV: 7500},
    "Windshield Coating": {SMALL: 2500, HATCH: 3000, MID: 3500, SUV: 4000},
    "Windshield Coating All Glasses": {SMALL: 5000, HATCH: 5500, MID: 6000, SUV: 6500},
    "Sun Control Film – Economy": {SMALL: 5200, HATCH: 6000, MID: 6500, SUV: 8400},
    "Sun Control Film – Standard": {SMALL: 7500, HATCH: 8300, MID: 9500, SUV: 12500},
    "Sun Control Film – Premium": {SMALL: 11500, HATCH: 13000, MID: 15000, SUV: 18000},
    "Sun Control Film – Ceramic": {SMALL: 13500, HATCH: 15500, MID: 18000, SUV: 21000},
}


def _freeze(table):
    """Recursively wrap nested dicts in read-only proxies with Decimal leaves."""
    if isinstance(table, dict):
        return MappingProxyType({key: _freeze(value) for key, value in table.items()})
    return Decimal(str(table))


@dataclass(frozen=True)
class PriceBook:
    ppf: MappingProxyType
    other_services: MappingProxyType

    @classmethod
    def from_tables(cls, ppf, other_services):
        return cls(ppf=_freeze(ppf), other_services=_freeze(other_services))

    def ppf_price(self, category, vehicle_type, warranty):
        try:
            return self.ppf[category][vehicle_type][warranty]
        except KeyError:
            raise ValidationFailed(
                f"No PPF price for {category} / {vehicle_type} / {warranty}"
            )

    def other_service_price(self, name, vehicle_type):
        try:
            return self.other_services[name][vehicle_type]
        except KeyError:
            raise ValidationFailed(f"No price for service {name} / {vehicle_type}")


@lru_cache(maxsize=1)
def get_price_book():
    """Price book from settings.GARAGE_PRICE_BOOK, else the built-in tables."""
    override = getattr(settings, "GARAGE_PRICE_BOOK", None) or {}
    return PriceBook.from_tables(
        override.get("ppf", DEFAULT_PPF_PRICES),
        override.get("other_services", DEFAULT_OTHER_SERVICE_PRICES),
    )


@dataclass(frozen=True)
class ServiceQuote:
    service_label: str
    total_service_cost: Decimal
    discounted_service_cost: Decimal
    labor_cost: Decimal
    subtotal: Decimal
    tax: Decimal
    total_amount: Decimal
    lines: tuple = field(default=())

    @property
    def is_billable(self):
        return self.discounted_service_cost > 0 or self.labor_cost > 0


def quote_service(price_book, ppf=None, other_services=(), discount_pct=0, labor_cost=0):
    """
    Price an intake selection.

    ``ppf`` is a mapping with category / vehicle_type / warranty keys;
    ``other_services`` is a list of mappings with name / vehicle_type keys.
    Values are kept at full precision; rounding is a display concern.
    """
    discount_pct = Decimal(str(discount_pct or 0))
    labor_cost = Decimal(str(labor_cost or 0))
    if not 0 <= discount_pct <= 100:
        raise ValidationFailed("Discount must be between 0 and 100 percent")
    if labor_cost < 0:
        raise ValidationFailed("Labor cost cannot be negative")

    lines = []
    labels = []
    if ppf:
        price = price_book.ppf_price(ppf["category"], ppf["vehicle_type"], ppf["warranty"])
        label = f"{ppf['category']} - {ppf['warranty']}"
        lines.append((label, price))
        labels.append(label)
    for service in other_services:
        price = price_book.other_service_price(service["name"], service["vehicle_type"])
        lines.append((service["name"], price))
    if other_services:
        labels.append(", ".join(service["name"] for service in other_services))

    total_service_cost = sum((price for _, price in lines), Decimal("0"))
    discounted = total_service_cost * (1 - discount_pct / 100)
    subtotal = discounted + labor_cost
    tax = subtotal * INTAKE_GST_RATE / 100
    return ServiceQuote(
        service_label=" + ".join(labels),
        total_service_cost=total_service_cost,
        discounted_service_cost=discounted,
        labor_cost=labor_cost,
        subtotal=subtotal,
        tax=tax,
        total_amount=subtotal + tax,
        lines=tuple(lines),
    )
