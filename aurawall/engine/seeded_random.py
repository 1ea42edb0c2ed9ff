"""
Seeded pseudo-random source for the wallpaper engine.

mulberry32: a 32-bit running state mixed with xorshift-multiply rounds. Every
generated artifact (blob geometry, recipe draws, variations) reads from an
explicit instance of this class so a fixed seed reproduces a scene exactly.
"""

import math
import secrets
from typing import Sequence, TypeVar, Union

T = TypeVar("T")

MASK_32 = 0xFFFFFFFF
GOLDEN_GAMMA = 0x6D2B79F5
SEED_MODULUS = 2147483647

SeedLike = Union[int, str]


def seed_from_string(text: str) -> int:
    """Reduce a string to an integer seed by summing its character codes.

    Lossy on purpose: anagrams collide. Deterministic across runs and hosts.
    """
    seed = 0
    for ch in text:
        seed = (seed + ord(ch)) % SEED_MODULUS
    return seed


class SeededRandom:
    """Deterministic float stream in [0, 1)."""

    def __init__(self, seed: int):
        self.seed = int(seed) & MASK_32
        self._state = self.seed

    @classmethod
    def from_string(cls, text: str) -> "SeededRandom":
        return cls(seed_from_string(text))

    @classmethod
    def from_seed(cls, seed: SeedLike) -> "SeededRandom":
        if isinstance(seed, str):
            return cls.from_string(seed)
        return cls(seed)

    @classmethod
    def unseeded(cls) -> "SeededRandom":
        """Instance seeded from OS entropy; output is not reproducible."""
        return cls(secrets.randbits(32))

    def next(self) -> float:
        self._state = (self._state + GOLDEN_GAMMA) & MASK_32
        t = self._state
        t = ((t ^ (t >> 15)) * (t | 1)) & MASK_32
        t ^= (t + (((t ^ (t >> 7)) * (t | 61)) & MASK_32)) & MASK_32
        return ((t ^ (t >> 14)) & MASK_32) / 4294967296

    def uniform(self, lo: float, hi: float) -> float:
        return lo + self.next() * (hi - lo)

    def randint(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi], both ends inclusive."""
        return math.floor(self.next() * (hi - lo + 1)) + lo

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise IndexError("Cannot choose from an empty sequence")
        return options[math.floor(self.next() * len(options))]

    def token(self) -> str:
        """Short hex tag, used to keep generated shape ids unique per run."""
        return f"{math.floor(self.next() * 0xFFFFFFFF):08x}"

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed})"
