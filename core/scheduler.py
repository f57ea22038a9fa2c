# Ready queues, one FIFO per level
from collections import deque
from typing import Deque, Optional, Tuple

from core.level import QueueLevel


class ReadyQueueSet:
    def __init__(self):
        self._queues: Tuple[Deque[int], ...] = tuple(deque() for _ in QueueLevel)

    def push(self, level: QueueLevel, handle: int):
        self._queues[QueueLevel(level).index].append(handle)

    def peek_first_nonempty(self) -> Optional[Tuple[QueueLevel, int]]:
        for level in QueueLevel:
            queue = self._queues[level.index]
            if queue:
                return level, queue[0]
        return None

    def pop_front(self, level: QueueLevel) -> int:
        return self._queues[QueueLevel(level).index].popleft()

    def has_ready(self) -> bool:
        return any(self._queues)

    def __len__(self):
        return sum(len(q) for q in self._queues)
