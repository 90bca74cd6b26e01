# jewelry_admin/models/options.py

"""Key/value select options (currency, material, rating)."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Self


@dataclass(frozen=True)
class SelectOption:
    """A select-dropdown value as Cosmic stores it: ``{key, value}``."""

    key: str
    value: str

    def to_dict(self) -> dict[str, str]:
        """Serialise to the wire shape."""
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_raw(cls, raw: Any) -> "SelectOption | None":
        """Read a ``{key, value}`` dict (or a bare key string)."""
        if isinstance(raw, dict):
            key = raw.get("key")
            if key is None or str(key).strip() == "":
                return None
            value = raw.get("value")
            return cls(
                key=str(key).strip(),
                value=str(value) if value is not None else str(key),
            )
        if isinstance(raw, (str, int)) and str(raw).strip():
            return cls(key=str(raw).strip(), value=str(raw).strip())
        return None


class OptionEnum(str, Enum):
    """Enumeration whose members carry a display label."""

    @classmethod
    def _missing_(cls, value: object) -> Self | None:
        # Accept "usd" for USD and "Gold" for gold
        if isinstance(value, str):
            folded = value.strip().lower()
            for member in cls:
                if member.value.lower() == folded:
                    return member
        return None

    @property
    def label(self) -> str:
        """Human-readable display value."""
        return _LABELS.get(self, self.value)

    def to_option(self) -> SelectOption:
        """Pack as the ``{key, value}`` pair written to Cosmic."""
        return SelectOption(key=self.value, value=self.label)

    @classmethod
    def from_key(cls, key: Any) -> Self | None:
        """Resolve a raw key (or ``{key, value}`` dict); ``None`` if unknown."""
        option = SelectOption.from_raw(key)
        if option is None:
            return None
        try:
            return cls(option.key)
        except ValueError:
            return None

    @classmethod
    def choices(cls) -> list[tuple[str, str]]:
        """``(label, key)`` pairs in declaration order, for select widgets."""
        return [(member.label, member.value) for member in cls]


class Currency(OptionEnum):
    """Supported price currencies."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class Material(OptionEnum):
    """Jewelry materials."""

    GOLD = "gold"
    SILVER = "silver"
    PLATINUM = "platinum"
    DIAMOND = "diamond"
    PEARL = "pearl"


class Rating(OptionEnum):
    """Review star rating, 1 to 5."""

    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"

    @property
    def stars(self) -> int:
        """Numeric rating."""
        return int(self.value)


_LABELS: dict[OptionEnum, str] = {
    Currency.USD: "USD",
    Currency.EUR: "EUR",
    Currency.GBP: "GBP",
    Material.GOLD: "Gold",
    Material.SILVER: "Silver",
    Material.PLATINUM: "Platinum",
    Material.DIAMOND: "Diamond",
    Material.PEARL: "Pearl",
    Rating.ONE: "1 Star",
    Rating.TWO: "2 Stars",
    Rating.THREE: "3 Stars",
    Rating.FOUR: "4 Stars",
    Rating.FIVE: "5 Stars",
}
