"""Display helpers for the product table."""


def format_price(price: float) -> str:
    """Render a price the way the table shows it, e.g. ``Rp 150,000``."""
    amount = f"{price:,.3f}".rstrip("0").rstrip(".")
    return f"Rp {amount}"


def format_status(is_active: bool) -> str:
    return "Active" if is_active else "Inactive"
