def format_amount(amount) -> str:
    """Rupee amount with thousands separators, paise only when non-zero."""
    amount = float(amount or 0)
    if amount.is_integer():
        return f"₹{amount:,.0f}"
    return f"₹{amount:,.2f}"
