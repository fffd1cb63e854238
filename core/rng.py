"""Deterministic seeded random number generator (mulberry32)."""

import time
from dataclasses import dataclass

_MASK = 0xFFFFFFFF
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, unsigned result."""
    return (a * b) & _MASK


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def hash_seed(seed: str) -> int:
    """
    Hash a seed string to a non-zero 32-bit integer.

    Operates on UTF-16 code units so seeds outside the BMP, and lone
    surrogates, hash the same way they do in browser clients.
    """
    units = seed.encode("utf-16-le", "surrogatepass")
    code_units = [units[i] | (units[i + 1] << 8) for i in range(0, len(units), 2)]

    h = (1779033703 ^ len(code_units)) & _MASK
    for unit in code_units:
        h = _imul(h ^ unit, 3432918353)
        h = ((h << 13) | (h >> 19)) & _MASK
    return h or 0x1


@dataclass(frozen=True)
class SeedState:
    """Observable RNG position, for audit and replay display only."""

    seed: str
    position: int


class SeededRng:
    """
    Reproducible pseudorandom stream derived from a string seed.

    The instance is stateful: a game must keep using the same object in the
    same call order to reproduce a run. state() is a counter, not a seek
    point; resuming means re-creating from the seed and replaying the calls.
    """

    def __init__(self, seed: str | None = None) -> None:
        """
        Initialize the generator.

        Args:
            seed: Seed string. Empty or None derives one from the current time.
        """
        self._seed = seed or to_base36(int(time.time() * 1000))
        self._state = hash_seed(self._seed)
        self._count = 0

    @property
    def seed(self) -> str:
        """Return the resolved seed string."""
        return self._seed

    def next(self) -> float:
        """Return the next float in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        self._count += 1
        return ((t ^ (t >> 14)) & _MASK) / 4294967296

    def int(self, max_exclusive: int) -> int:
        """Return an integer in [0, max_exclusive)."""
        if max_exclusive <= 0:
            raise ValueError("max_exclusive must be > 0")
        return int(self.next() * max_exclusive)

    def state(self) -> SeedState:
        """Return the seed and the number of values drawn so far."""
        return SeedState(seed=self._seed, position=self._count)


def create_rng(seed: str | None = None) -> SeededRng:
    """Create a new seeded generator."""
    return SeededRng(seed)
