from typing import Optional

from core.descriptor import ProcessDescriptor
from core.errors import InvalidLevelAssignment
from core.level import QueueLevel

NOT_DISPATCHED = -1


class ProcessRecord:
    def __init__(self, label: str, burst_time: int, arrival_time: int, level: int, priority: int = 0):
        if not QueueLevel.is_valid(level):
            raise InvalidLevelAssignment(label, level)
        self.label = label
        self.burst_original = burst_time
        self.burst_remaining = burst_time
        self.arrival_time = arrival_time
        self.level = QueueLevel(level)
        self.priority = priority
        self.completion_time = 0
        self.turnaround_time = 0
        self.waiting_time = 0
        self.response_time = NOT_DISPATCHED

    @classmethod
    def from_descriptor(cls, descriptor: ProcessDescriptor) -> 'ProcessRecord':
        return cls(descriptor.label, descriptor.burst_time, descriptor.arrival_time,
                   descriptor.level, descriptor.priority)

    @property
    def completed(self) -> bool:
        # non-positive bursts are accepted and finish on their first dispatch
        return self.burst_remaining <= 0

    @property
    def dispatched(self) -> bool:
        return self.response_time != NOT_DISPATCHED

    def run_slice(self, now: int) -> int:
        """Execute one dispatch starting at `now` and return the slice length.

        The slice is bounded by the level's quantum and by the remaining burst.
        Response time is fixed on the first dispatch only.
        """
        slice_len = max(0, min(self.burst_remaining, self.level.quantum))
        if not self.dispatched:
            self.response_time = now - self.arrival_time
        self.burst_remaining -= slice_len
        return slice_len

    def complete(self, now: int) -> None:
        self.completion_time = now
        self.turnaround_time = self.completion_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_original

    def first_dispatch_time(self) -> Optional[int]:
        if not self.dispatched:
            return None
        return self.arrival_time + self.response_time

    def __repr__(self) -> str:
        return (f"ProcessRecord(label={self.label}, q={int(self.level)}, bt={self.burst_original}, "
                f"left={self.burst_remaining}, at={self.arrival_time}, ct={self.completion_time})")
