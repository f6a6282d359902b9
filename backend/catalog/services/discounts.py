"""
Discount label parsing.
Labels are free text ("20% OFF", "$5 OFF", "2x1"); only percentages are
comparable, everything else parses to None.
"""

from typing import Optional
import re

_PERCENT_RE = re.compile(r"(\d+)\s*%")


def parse_percent(label: Optional[str]) -> Optional[int]:
    """Return the first integer immediately before a '%' sign, or None."""
    if not label:
        return None
    match = _PERCENT_RE.search(label)
    if not match:
        return None
    return int(match.group(1))
