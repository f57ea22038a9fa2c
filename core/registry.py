from typing import Iterable, Iterator, List, Optional

from core.process import ProcessRecord


class ProcessRegistry:
    """Arena of process records for one simulation run.

    Records are sorted by arrival time once, at construction, and never move
    afterwards, so an integer handle (position in the arena) stays valid for
    the whole run. The sort is stable: processes with equal arrival times keep
    their input order.
    """

    def __init__(self, records: Iterable[ProcessRecord]):
        self._records: List[ProcessRecord] = sorted(records, key=lambda r: r.arrival_time)
        self.next_admission = 0

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ProcessRecord]:
        return iter(self._records)

    def __getitem__(self, handle: int) -> ProcessRecord:
        return self._records[handle]

    def has_unadmitted(self) -> bool:
        return self.next_admission < len(self._records)

    def next_arrival(self) -> Optional[int]:
        if not self.has_unadmitted():
            return None
        return self._records[self.next_admission].arrival_time

    def admit_until(self, now: int) -> List[int]:
        """Advance the admission cursor past every record with arrival <= now."""
        admitted = []
        while self.has_unadmitted() and self._records[self.next_admission].arrival_time <= now:
            admitted.append(self.next_admission)
            self.next_admission += 1
        return admitted

    def records(self) -> List[ProcessRecord]:
        return list(self._records)
