from enum import IntEnum


# Quantum per level, indexed by level - 1
QUANTA = (1, 3, 2)


class QueueLevel(IntEnum):
    LEVEL_1 = 1
    LEVEL_2 = 2
    LEVEL_3 = 3

    @property
    def quantum(self) -> int:
        return QUANTA[self - 1]

    @property
    def index(self) -> int:
        return self - 1

    @classmethod
    def is_valid(cls, value: int) -> bool:
        return any(value == member for member in cls)
