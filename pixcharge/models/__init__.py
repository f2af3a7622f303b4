from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def to_decimal(amount: Decimal | float | int | str) -> Decimal:
    """Convert an amount to a Decimal rounded to centavos (half-up)."""
    if isinstance(amount, float):
        amount = repr(amount)
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def format_brl(amount: Decimal) -> str:
    """Format reais as BRL string: Decimal('2850.5') -> 'R$ 2.850,50'"""
    formatted = f"{to_decimal(amount):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"R$ {formatted}"


def parse_brl(text: str) -> Decimal | None:
    """Parse a BRL amount string into reais. Returns None on invalid input.

    Accepts formats like '2850', '2850.00', '2.850,00', '2850,50'.
    """
    text = text.strip().removeprefix("R$").strip()
    if not text:
        return None
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    try:
        return to_decimal(text)
    except InvalidOperation:
        return None
