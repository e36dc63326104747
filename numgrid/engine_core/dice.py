"""
Dice - Finite face sets rolled with an injected random source.

A die is any non-empty set of face values, a pool is an ordered collection
of dice. Rolling a pool draws one face per die and sums them.

The rng only needs `randint(a, b)` (inclusive), so `random.Random` or a
seeded subclass works for reproducible games.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Protocol


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class Die:
    faces: tuple[int, ...]

    def __post_init__(self):
        if not self.faces:
            raise ValueError("A die needs at least one face")

    @classmethod
    def sided(cls, sides: int) -> Die:
        """Standard die numbered 1..sides."""
        return cls(faces=tuple(range(1, sides + 1)))

    @property
    def minimum(self) -> int:
        return min(self.faces)

    @property
    def maximum(self) -> int:
        return max(self.faces)

    def roll(self, rng: RandomSource) -> int:
        return self.faces[rng.randint(0, len(self.faces) - 1)]


@dataclass(frozen=True)
class DicePool:
    dice: tuple[Die, ...]

    def __post_init__(self):
        if not self.dice:
            raise ValueError("A dice pool needs at least one die")

    @classmethod
    def from_faces(cls, faces: Iterable[Iterable[int]]) -> DicePool:
        """Build a pool from nested face lists, e.g. [[1, 2, 3], [1, 2]]."""
        return cls(dice=tuple(Die(faces=tuple(f)) for f in faces))

    @property
    def minimum(self) -> int:
        return sum(die.minimum for die in self.dice)

    @property
    def maximum(self) -> int:
        return sum(die.maximum for die in self.dice)

    def roll(self, rng: RandomSource) -> int:
        return sum(die.roll(rng) for die in self.dice)
