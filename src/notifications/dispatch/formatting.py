"""Display formatting for message parameters."""


def _group_indian(digits: str) -> str:
    # Last three digits, then groups of two: 12,34,567
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


def format_inr(amount: float) -> str:
    """Format as rupees with Indian digit grouping and no decimals: ``₹1,23,456``."""
    rounded = round(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}₹{_group_indian(str(abs(rounded)))}"


def summarize_items(items: list[dict], limit: int = 3) -> str:
    """``"2x Kurta, 1x Dupatta +2 more"`` from order lines with title and quantity."""
    summary = ", ".join(f"{item['quantity']}x {item['title']}" for item in items[:limit])
    if len(items) > limit:
        summary += f" +{len(items) - limit} more"
    return summary
