"""
Семь координатных пространств, через которые проходит вершина.
Номера используются для сравнения порядка стадий.
"""

from enum import IntEnum


class Space(IntEnum):
    LOCAL = 0
    WORLD = 1
    EYE = 2
    PROJECTION = 3
    CLIP = 4
    NDC = 5
    SCREEN = 6

    @property
    def previous(self):
        """Предыдущее пространство или None для LOCAL."""
        if self is Space.LOCAL:
            return None
        return Space(self - 1)

    @classmethod
    def up_to(cls, target: "Space"):
        """Все пространства от LOCAL до target включительно."""
        return [s for s in cls if s <= target]
