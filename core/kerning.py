"""
Kerning table for letter pairs
"""

from types import MappingProxyType
from typing import Optional

# Adjustment applied between the first and second character of each pair.
# Lookups use the literal pair, so lowercase entries only match lowercase text.
KERNING = MappingProxyType({
    "AV": -20,
    "WA": -15,
    "To": -10,
    "Ty": -8,
    "Yo": -8,
})


def kerning_adjust(letter: str, next_letter: Optional[str]) -> int:
    """Horizontal adjustment between ``letter`` and the letter after it"""
    if not next_letter:
        return 0
    return KERNING.get(letter + next_letter, 0)
