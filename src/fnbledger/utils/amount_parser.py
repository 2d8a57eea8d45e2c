"""Amount parsing utilities.

Two flavours live here. ``parse_amount`` is strict and used where a person
typed the number (CLI arguments); it raises on bad input. ``to_decimal`` and
``safe_number`` are lenient and used on stored day records, where anything
missing or unreadable counts as zero.
"""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
import re
from typing import Any

ZERO = Decimal("0")

# Exponent range of an IEEE double; larger values read as infinity, smaller as zero
_MAX_EXPONENT = 308
_MIN_EXPONENT = -324

# Leading numeric prefix, the way a lenient float parse reads "12.5abc" as 12.5
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "R$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"R\$|[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return -amount if is_negative else amount


def to_decimal(raw: Any) -> Decimal:
    """Coerce a stored value to a Decimal, falling back to zero.

    Accepts ints, floats, Decimals and strings with a leading number.
    ``None``, booleans, containers, NaN and infinities all become zero, as
    do magnitudes outside the range of a double.
    """
    if raw is None or isinstance(raw, bool):
        return ZERO

    if isinstance(raw, Decimal):
        return _bounded(raw)

    if isinstance(raw, int):
        return _bounded(Decimal(raw))

    if isinstance(raw, float):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        return _bounded(Decimal(str(raw)))

    if isinstance(raw, str):
        match = _NUMERIC_PREFIX.match(raw)
        if match is None:
            return ZERO
        try:
            value = Decimal(match.group(1))
        except InvalidOperation:
            return ZERO
        return _bounded(value)

    return ZERO


def _bounded(value: Decimal) -> Decimal:
    if not value.is_finite() or not value:
        return ZERO
    if not _MIN_EXPONENT <= value.adjusted() <= _MAX_EXPONENT:
        return ZERO
    return value


def safe_number(data: Any, path: str) -> Decimal:
    """Read the number at a dotted ``path`` inside nested mappings.

    Returns zero when ``data`` is empty, a segment is missing, an intermediate
    value is not a mapping, or the leaf is not numeric.

    Example:
        >>> safe_number({"channels": {"cdmNoShow": {"qtd": "3"}}}, "channels.cdmNoShow.qtd")
        Decimal('3')
    """
    current = data
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return ZERO
        current = current[part]
    return to_decimal(current)


def sub_tab(period: Any, name: str) -> Mapping[str, Any]:
    """Return a shift period's sub-tab, or an empty mapping."""
    if not isinstance(period, Mapping):
        return {}
    sub_tabs = period.get("subTabs")
    if not isinstance(sub_tabs, Mapping):
        return {}
    tab = sub_tabs.get(name)
    return tab if isinstance(tab, Mapping) else {}


def channels_of(container: Any) -> Mapping[str, Any]:
    """Return the ``channels`` map of a period or sub-tab, or an empty mapping."""
    if not isinstance(container, Mapping):
        return {}
    channels = container.get("channels")
    return channels if isinstance(channels, Mapping) else {}


def item_list(container: Any, key: str) -> list[Mapping[str, Any]]:
    """Return the mapping entries of an itemized list, skipping anything else."""
    if not isinstance(container, Mapping):
        return []
    items = container.get(key)
    if not isinstance(items, (list, tuple)):
        return []
    return [item for item in items if isinstance(item, Mapping)]


def channel_quantity(channels: Any, channel_id: str) -> Decimal:
    """Quantity (``qtd``) recorded for a channel."""
    if not isinstance(channels, Mapping):
        return ZERO
    return safe_number(channels.get(channel_id), "qtd")


def channel_value(channels: Any, channel_id: str) -> Decimal:
    """Total value (``vtotal``) recorded for a channel."""
    if not isinstance(channels, Mapping):
        return ZERO
    return safe_number(channels.get(channel_id), "vtotal")
