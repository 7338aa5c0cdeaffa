def format_amount(cents: int, currency: str = "") -> str:
    """Format minor units as a display string: 285000, 'INR' -> 'INR 2,850.00'"""
    formatted = f"{cents / 100:,.2f}"
    if currency:
        return f"{currency} {formatted}"
    return formatted

