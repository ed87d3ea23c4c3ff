# src/powerdict/core/ids.py
"""
Short entry ids.

Ids are drawn at random and redrawn while they collide with an id already
in use. With six uppercase letters there are 26^6 (about 3.1e8) ids, so a
redraw is rare in practice and no central counter is needed.
"""

import random
import string
from collections.abc import Collection

from powerdict.core.errors import IdSpaceExhaustedError


ID_ALPHABET = string.ascii_uppercase
ID_LENGTH = 6


class IdGenerator:
    def __init__(
        self,
        rng: random.Random | None = None,
        alphabet: str = ID_ALPHABET,
        length: int = ID_LENGTH,
    ):
        if not alphabet or length < 1:
            raise ValueError("alphabet must be non-empty and length positive")
        self.rng = rng if rng is not None else random.Random()
        self.alphabet = alphabet
        self.length = length

    @property
    def space(self) -> int:
        return len(self.alphabet) ** self.length

    def draw(self) -> str:
        return "".join(self.rng.choice(self.alphabet) for _ in range(self.length))

    def generate(self, taken: Collection[str]) -> str:
        """Return an id not contained in `taken`."""
        if sum(1 for t in taken if self._is_candidate(t)) >= self.space:
            raise IdSpaceExhaustedError(f"All {self.space} entry ids are in use")

        while True:
            candidate = self.draw()
            if candidate not in taken:
                return candidate

    def _is_candidate(self, value: str) -> bool:
        return len(value) == self.length and all(c in self.alphabet for c in value)
