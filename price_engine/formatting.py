"""
INR formatting utilities.
"""


def _group_indian(digits: str) -> str:
    """Group a digit string the Indian way: 12,34,56,789."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def _round_whole(amount: float) -> int:
    # Half away from zero, like displayed currency amounts usually are
    sign = -1 if amount < 0 else 1
    return sign * int(abs(amount) + 0.5)


def format_inr(amount: float) -> str:
    """
    Format an amount as whole rupees.

    Args:
        amount: The amount in rupees.

    Returns:
        Formatted string, e.g. "₹12,34,567" or "-₹5,000".
    """
    rounded = _round_whole(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}₹{_group_indian(str(abs(rounded)))}"


def format_inr_short(amount: float) -> str:
    """
    Format an amount in crore / lakh / thousand units.

    Examples: "₹1.25 Cr", "₹45.00 L", "₹12K", "₹950". Negative amounts are
    scaled on their magnitude and keep a leading sign: "-₹12.00 L".
    """
    sign = "-" if amount < 0 else ""
    value = abs(amount)
    if value >= 10_000_000:
        return f"{sign}₹{value / 10_000_000:.2f} Cr"
    if value >= 100_000:
        return f"{sign}₹{value / 100_000:.2f} L"
    if value >= 1000:
        return f"{sign}₹{value / 1000:.0f}K"
    return f"{sign}₹{_group_indian(str(_round_whole(value)))}"
