"""Describing hardware registers as packed bit fields."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Field:
    """A named run of ``width`` bits within a register."""

    name: str
    width: int

    def __post_init__(self) -> None:
        if self.width < 1:
            raise ValueError(f"field {self.name!r} must be at least one bit wide")

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1


@dataclass(frozen=True)
class RegisterLayout:
    """A register made of fields packed from the least significant bit up."""

    name: str
    fields: tuple[Field, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        names = [f.name for f in self.fields]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate field names in register {self.name!r}")

    def _placements(self) -> Iterator[tuple[Field, int]]:
        offset = 0
        for f in self.fields:
            yield f, offset
            offset += f.width

    def width(self) -> int:
        """Total number of bits in the register."""
        return sum(f.width for f in self.fields)

    def decode(self, value: int) -> dict[str, int]:
        """Split a raw register value into its fields."""
        if not 0 <= value < 1 << self.width():
            raise ValueError(f"value {value:#x} does not fit register {self.name!r}")
        return {f.name: (value >> offset) & f.mask for f, offset in self._placements()}

    def encode(self, **kwargs: int) -> int:
        """Pack field values into a raw register value; missing fields are 0."""
        unknown = set(kwargs) - {f.name for f in self.fields}
        if unknown:
            raise TypeError(
                f"unknown field(s) for register {self.name!r}: {', '.join(sorted(unknown))}")
        value = 0
        for f, offset in self._placements():
            field_value = kwargs.get(f.name, 0)
            if not 0 <= field_value <= f.mask:
                raise ValueError(
                    f"{field_value} does not fit {f.width}-bit field {f.name!r}")
            value |= field_value << offset
        return value