"""Modèle du widget d'entraînement : une liste d'éléments colorés."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

logger = logging.getLogger(__name__)

HEX_DIGITS = "0123456789ABCDEF"


@dataclass(frozen=True, slots=True)
class PracticeItem:
    uid: int
    color: str


def random_color(rng: random.Random | None = None) -> str:
    """Tire chacun des 6 chiffres hexadécimaux indépendamment."""
    rng = rng or random.Random()
    color = "#" + "".join(rng.choice(HEX_DIGITS) for _ in range(6))
    logger.debug("Nuevo color %s", color)
    return color


class PracticeBoard:
    """Liste ordonnée d'éléments ; les uid ne sont jamais réutilisés avant un clear()."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self.items: list[PracticeItem] = []
        self.counter = 0

    def add(self) -> PracticeItem:
        self.counter += 1
        item = PracticeItem(uid=self.counter, color=random_color(self._rng))
        self.items.append(item)
        return item

    def clear(self) -> None:
        self.items = []
        self.counter = 0

    def remove(self, uid: int) -> None:
        self.items = [item for item in self.items if item.uid != uid]

    def labels(self) -> list[str]:
        return [f"Elemento {position} 👍" for position in range(1, len(self.items) + 1)]
