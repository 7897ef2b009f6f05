"""Base generator interface and the shared shuffle helper."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: random.Random) -> List[T]:
    """Fisher-Yates shuffle of a copy of ``items`` using ``rng``."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class BaseGenerator(ABC):
    """
    Abstract base class for the selection generators.

    A generator makes one pass over its inputs, returns a plain result, and can
    render that result as a text transcript. Randomness comes only from ``rng``,
    so passing ``random.Random(seed)`` gives reproducible output.
    """

    name: str | None = None  # Override in subclasses

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    @abstractmethod
    def generate(self, *args, **kwargs):
        """Run one generation pass and return the result list."""
        pass

    @abstractmethod
    def render(self, result, title: str | None = None) -> str:
        """Render a result list as a plain-text transcript."""
        pass

    def get_name(self) -> str:
        return self.name or "UNKNOWN"
