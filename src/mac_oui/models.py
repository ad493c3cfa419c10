from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


class BlockSize(Enum):
    LARGE = "MA-L"
    MEDIUM = "MA-M"
    SMALL = "MA-S"
    INDIVIDUAL = "IAB"

    @classmethod
    def from_text(cls, text: str) -> BlockSize:
        """
        Raises ValueError for anything that is not one of the four registry tags.
        """
        return cls(text.strip().upper())


def parse_private_flag(text: str | None) -> bool:
    # Only the literal "1" means private; any other value, malformed or not, is False.
    return text == "1"


@dataclass(frozen=True)
class Record:
    block_notation: str
    is_private: bool
    organization_name: str
    organization_address: str
    country_code: str
    block_size_class: BlockSize
    date_created: str
    date_updated: str

    def to_dict(self) -> dict[str, str | bool]:
        d = asdict(self)
        d["block_size_class"] = self.block_size_class.value
        return d
