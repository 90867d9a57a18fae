"""Currency -- ISO 4217 codes accepted for host payouts, with minor units."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class CurrencyInfo:
    code: str
    decimal_places: int
    name: str


def _table(*entries: tuple[str, int, str]) -> dict[str, CurrencyInfo]:
    return {code: CurrencyInfo(code, places, name) for code, places, name in entries}


class CurrencyRegistry:
    """
    Lookup of supported payout currencies.

    Bookings are priced in Vietnamese dong by default; the other regional
    currencies are accepted so a host portfolio can be reported in the
    currency it was sold in.
    """

    _CURRENCIES: ClassVar[dict[str, CurrencyInfo]] = _table(
        ("VND", 0, "Vietnamese Dong"),
        ("KRW", 0, "South Korean Won"),
        ("JPY", 0, "Japanese Yen"),
        ("USD", 2, "US Dollar"),
        ("EUR", 2, "Euro"),
        ("GBP", 2, "Pound Sterling"),
        ("AUD", 2, "Australian Dollar"),
        ("SGD", 2, "Singapore Dollar"),
        ("THB", 2, "Thai Baht"),
        ("KHR", 2, "Cambodian Riel"),
        ("LAK", 2, "Lao Kip"),
        ("IDR", 2, "Indonesian Rupiah"),
        ("MYR", 2, "Malaysian Ringgit"),
        ("PHP", 2, "Philippine Peso"),
        ("CNY", 2, "Chinese Yuan"),
        ("HKD", 2, "Hong Kong Dollar"),
        ("TWD", 2, "New Taiwan Dollar"),
    )

    @staticmethod
    def _normalize(code: object) -> str:
        return code.upper().strip() if isinstance(code, str) else ""

    @classmethod
    def get_info(cls, code: str) -> CurrencyInfo | None:
        return cls._CURRENCIES.get(cls._normalize(code))

    @classmethod
    def is_valid(cls, code: str) -> bool:
        return cls.get_info(code) is not None

