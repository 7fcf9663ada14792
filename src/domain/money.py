"""Currency formatting"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union
from src.domain.invoice import Currency

# symbol, decimal places (UGX has no minor unit)
_CURRENCY_FORMATS = {
    Currency.UGX: ("USh ", 0),
    Currency.USD: ("$", 2),
}


def format_currency(amount: Union[Decimal, int, float, str], currency: Union[Currency, str]) -> str:
    """
    Format an amount for display

    Examples:
        format_currency(Decimal("1000"), "UGX")   -> "USh 1,000"
        format_currency(Decimal("1000"), "USD")   -> "$1,000.00"
        format_currency(Decimal("-12.5"), "USD")  -> "-$12.50"
    """
    value = Decimal(str(amount))
    code = currency.value if isinstance(currency, Currency) else str(currency).upper()

    try:
        symbol, places = _CURRENCY_FORMATS[Currency(code)]
    except ValueError:
        symbol, places = f"{code} ", 2

    quantum = Decimal(1).scaleb(-places)
    rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.{places}f}"
