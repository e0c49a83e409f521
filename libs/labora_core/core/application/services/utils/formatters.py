"""
Utilities for formatting data in documents and dashboards.
Brazilian conventions: R$ 1.234,56 and DD/MM/YYYY.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union


class BrazilianFormatter:
    """Class for formatting data according to Brazilian standards."""

    ABBREVIATED_MONTHS = {
        1: "jan", 2: "fev", 3: "mar", 4: "abr",
        5: "mai", 6: "jun", 7: "jul", 8: "ago",
        9: "set", 10: "out", 11: "nov", 12: "dez"
    }

    def __init__(self, currency_symbol: str = "R$"):
        self.currency_symbol = currency_symbol

    def format_currency(self, value: Union[int, float, Decimal, str, None]) -> str:
        """
        Formats monetary values in the Brazilian standard, e.g. R$ 1.234,50.
        Values go through Decimal so 1234.5 never turns into 1234.4999.
        """
        try:
            amount = Decimal(str(value if value is not None else 0))
        except InvalidOperation:
            amount = Decimal("0")
        amount = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        # US style grouping; swap comma/dot for Brazilian style
        us_str = f"{amount:,.2f}"
        return f"{self.currency_symbol} " + us_str.replace(',', 'X').replace('.', ',').replace('X', '.')

    @staticmethod
    def format_date(date_obj: Union[date, datetime, str, None], format_type: str = "numerico") -> str:
        """
        Formats dates in Brazilian Portuguese.

        Args:
            date_obj: The date to be formatted.
            format_type: The format type ('numerico' or 'abrev').

        Returns:
            str: The formatted date ("" when missing or unparseable).
        """
        try:
            if isinstance(date_obj, str):
                if 'T' in date_obj:  # ISO format
                    date_obj = datetime.fromisoformat(date_obj.replace('Z', '+00:00'))
                else:
                    date_obj = datetime.strptime(date_obj, '%Y-%m-%d')

            if isinstance(date_obj, datetime):
                date_obj = date_obj.date()

            if not isinstance(date_obj, date):
                return ""

            if format_type == "abrev":
                month = BrazilianFormatter.ABBREVIATED_MONTHS[date_obj.month]
                return f"{month}/{date_obj.year}"

            return date_obj.strftime("%d/%m/%Y")

        except (ValueError, KeyError, TypeError):
            return ""


# Global formatter instance
formatter = BrazilianFormatter()
