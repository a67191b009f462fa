"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from duofin.domain.errors import ValidationError, negative_amount


def parse_amount(amount_str) -> Decimal:
    """Parse an amount into a non-negative Decimal.

    Handles various formats:
    - 123.45 (int, float or Decimal values are accepted as-is)
    - "123.45"
    - "R$ 123.45", "$123.45"
    - "1,234.56"
    - "1.234,56" (comma as decimal separator)

    Args:
        amount_str: Amount string or number

    Returns:
        Decimal amount

    Raises:
        ValidationError: If amount cannot be parsed or is negative
    """
    if isinstance(amount_str, bool):
        raise ValidationError(f"Could not parse amount '{amount_str}'")
    if isinstance(amount_str, (int, Decimal)):
        amount = Decimal(amount_str)
    elif isinstance(amount_str, float):
        # repr keeps 0.1 as "0.1" instead of the binary expansion
        amount = Decimal(repr(amount_str))
    else:
        if not amount_str or not str(amount_str).strip():
            raise ValidationError("Empty amount string")

        cleaned = re.sub(r"(R\$|[$€£¥\s])", "", str(amount_str))

        # The right-most separator is the decimal separator
        if "," in cleaned and "." in cleaned:
            if cleaned.rfind(",") > cleaned.rfind("."):
                cleaned = cleaned.replace(".", "").replace(",", ".")
            else:
                cleaned = cleaned.replace(",", "")
        elif "," in cleaned:
            head, _, tail = cleaned.rpartition(",")
            if len(tail) == 3 and head:
                cleaned = cleaned.replace(",", "")
            else:
                cleaned = cleaned.replace(",", ".")

        try:
            amount = Decimal(cleaned)
        except InvalidOperation as e:
            raise ValidationError(f"Could not parse amount '{amount_str}'") from e

    if not amount.is_finite():
        raise ValidationError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValidationError(negative_amount("amount", amount))
    return amount
