import re
from typing import List

_ADDRESS_SEPARATORS = re.compile(r"[,;]")


def parse_recipients(raw: str) -> List[str]:
    """
    Normalize a recipient list string:
    - Split by comma or semicolon
    - Strip spaces
    - Drop empty entries
    - Keep the original order
    """
    if not raw:
        return []
    return [addr.strip() for addr in _ADDRESS_SEPARATORS.split(str(raw)) if addr.strip()]


def format_gust(value: float) -> str:
    """Two decimals, whatever the magnitude (15.0 -> '15.00')."""
    return f"{float(value):.2f}"


def parse_bool(raw: str) -> bool:
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}
