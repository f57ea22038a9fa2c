from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessDescriptor:
    label: str
    burst_time: int     # total CPU time required
    arrival_time: int   # logical time the process becomes ready
    level: int          # ready queue the process belongs to (1-3)
    priority: int       # carried through to the report, not used for ordering

    def __repr__(self):
        return f"Descriptor({self.label} bt={self.burst_time} at={self.arrival_time} q={self.level} p={self.priority})"
