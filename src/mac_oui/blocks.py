from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidMask, MalformedBlockNotation

ADDRESS_BITS = 48
ADDRESS_MAX = 0xFFFF_FFFF_FFFF

# MA-L, the registry's most common assignment
DEFAULT_MASK = 24
MIN_MASK = 8
MAX_MASK = 48

_SEPARATORS = str.maketrans("", "", ":-.")
_HEX_RE = re.compile(r"[0-9A-F]+")
_MASK_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class BlockRange:
    start: int
    end: int
    mask: int

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, value: int) -> bool:
        return self.start <= value <= self.end


def parse_mask(text: str, notation: str) -> int:
    if not _MASK_RE.fullmatch(text):
        raise MalformedBlockNotation(f"mask is not a number: {notation!r}", notation)
    mask = int(text)
    if not MIN_MASK <= mask <= MAX_MASK:
        raise InvalidMask(f"incorrect mask value {mask} in {notation!r}", notation)
    return mask


def decode_block(notation: str) -> BlockRange:
    """
    Turn a registry block notation into a closed 48-bit interval.

    "70:B3:D5" is a 24-bit OUI and is shifted into the top of the address
    space. "70:B3:D5:20:00:00/28" carries an explicit mask and its value is
    taken as already positioned in the 48-bit space.
    """
    parts = notation.split("/")
    if len(parts) == 1:
        mask = DEFAULT_MASK
    elif len(parts) == 2:
        mask = parse_mask(parts[1], notation)
    else:
        raise MalformedBlockNotation(
            f"invalid number of mask separators in {notation!r}", notation
        )

    digits = parts[0].strip().translate(_SEPARATORS).upper()
    if not _HEX_RE.fullmatch(digits):
        raise MalformedBlockNotation(f"could not parse OUI value {notation!r}", notation)
    value = int(digits, 16)

    start = value << 24 if mask == DEFAULT_MASK else value
    if start > ADDRESS_MAX:
        raise MalformedBlockNotation(
            f"OUI value {notation!r} does not fit in {ADDRESS_BITS} bits", notation
        )
    end = start | (ADDRESS_MAX >> mask)
    return BlockRange(start=start, end=end, mask=mask)
