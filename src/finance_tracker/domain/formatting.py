def _group_thousands(whole: str) -> str:
    groups = []
    while len(whole) > 3:
        groups.insert(0, whole[-3:])
        whole = whole[:-3]
    groups.insert(0, whole)
    return ".".join(groups)


def format_currency(amount: float, symbol: str = "€", decimals: int = 2) -> str:
    """Format ``amount`` the es-ES way, e.g. ``1.234,56 €``."""
    sign = "-" if amount < 0 else ""
    formatted = f"{abs(amount):.{decimals}f}"
    whole, _, fraction = formatted.partition(".")
    # es-ES leaves four-digit amounts ungrouped.
    if len(whole) > 4:
        whole = _group_thousands(whole)
    body = f"{whole},{fraction}" if fraction else whole
    return f"{sign}{body} {symbol}"
