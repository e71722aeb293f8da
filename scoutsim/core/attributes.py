"""
Player attribute container.

Every player carries the same fixed set of 1-20 attributes. Values are always
clamped on write so downstream code never sees an out-of-range attribute.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping


ATTRIBUTE_MIN = 1
ATTRIBUTE_MAX = 20
DEFAULT_ATTRIBUTE_VALUE = 10


# Order matters: development draws shuffle this tuple, so it must be stable.
ALL_ATTRIBUTES = (
    # Physical
    "pace",
    "stamina",
    "agility",
    "strength",
    # Technical
    "shooting",
    "finishing",
    "passing",
    "dribbling",
    "first_touch",
    "crossing",
    "heading",
    "tackling",
    # Mental
    "positioning",
    "defensive_awareness",
    "vision",
    "composure",
    "work_rate",
    "decision_making",
    "leadership",
)

# Attributes worn down by a serious injury
PHYSICAL_ATTRIBUTES = ("pace", "stamina", "agility")


def clamp_attribute(value: int) -> int:
    return max(ATTRIBUTE_MIN, min(ATTRIBUTE_MAX, value))


def _default_values() -> Dict[str, int]:
    return {name: DEFAULT_ATTRIBUTE_VALUE for name in ALL_ATTRIBUTES}


@dataclass
class PlayerAttributes:
    """
    Container for a player's attribute values.

    Dict-like access is supported (``attrs["pace"]``). Unknown names raise
    KeyError on read so typos surface in tests instead of silently reading a
    default.
    """

    _values: Dict[str, int] = field(default_factory=_default_values)

    def __post_init__(self) -> None:
        merged = _default_values()
        for name, value in self._values.items():
            merged[name] = clamp_attribute(value)
        self._values = merged

    @classmethod
    def from_values(cls, **values: int) -> "PlayerAttributes":
        """Build attributes with the given overrides and defaults elsewhere."""
        return cls(dict(values))

    def get(self, attr_name: str) -> int:
        return self._values[attr_name]

    def set(self, attr_name: str, value: int) -> None:
        """Set an attribute value, clamping to the valid range."""
        if attr_name not in self._values:
            raise KeyError(attr_name)
        self._values[attr_name] = clamp_attribute(value)

    def __getitem__(self, attr_name: str) -> int:
        return self.get(attr_name)

    def __setitem__(self, attr_name: str, value: int) -> None:
        self.set(attr_name, value)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def items(self) -> Iterator[tuple[str, int]]:
        return iter(self._values.items())

    def copy(self) -> "PlayerAttributes":
        return PlayerAttributes(dict(self._values))

    def with_deltas(self, deltas: Mapping[str, int]) -> "PlayerAttributes":
        """Return a new container with deltas added and clamped. Self is untouched."""
        updated = self.copy()
        for name, delta in deltas.items():
            if name in updated._values:
                updated._values[name] = clamp_attribute(updated._values[name] + delta)
        return updated


__all__ = [
    "ALL_ATTRIBUTES",
    "ATTRIBUTE_MAX",
    "ATTRIBUTE_MIN",
    "DEFAULT_ATTRIBUTE_VALUE",
    "PHYSICAL_ATTRIBUTES",
    "PlayerAttributes",
    "clamp_attribute",
]
