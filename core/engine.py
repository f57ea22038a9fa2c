from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Iterable, List, Optional

from core.descriptor import ProcessDescriptor
from core.event import Event, EventType
from core.process import ProcessRecord
from core.registry import ProcessRegistry
from core.scheduler import ReadyQueueSet


class EngineState(Enum):
    IDLE = auto()
    DISPATCHING = auto()
    TERMINATED = auto()


@dataclass
class SimulationResult:
    makespan: int
    processes: List[ProcessRecord]
    trace: List[Event] = field(default_factory=list)
    cpu_busy_time: int = 0

    @property
    def cpu_utilisation(self) -> int:
        if self.makespan <= 0:
            return 0
        return self.cpu_busy_time * 100 // self.makespan

    def idle_intervals(self) -> List[Event]:
        return [ev for ev in self.trace if ev.type == EventType.IDLE]

    def slices(self, label: Optional[str] = None) -> List[Event]:
        return [ev for ev in self.trace
                if ev.type == EventType.DISPATCH and (label is None or ev.label == label)]


class SchedulerEngine:
    """Multi-level queue dispatcher without feedback.

    Levels are served in strict order 1, 2, 3; each level is round robin with
    its own fixed quantum. A process always returns to the level it started
    in, and a slice, once taken, is never cut short by an arrival.
    """

    def __init__(self, descriptors: Iterable[ProcessDescriptor], verbose: bool = False):
        self.registry = ProcessRegistry(ProcessRecord.from_descriptor(d) for d in descriptors)
        self.queues = ReadyQueueSet()
        self.verbose = verbose

        self.current_time = 0
        self.state = EngineState.IDLE
        self.running: Optional[int] = None
        self.completed = 0
        self.cpu_busy_time = 0

        self.trace: List[Event] = []
        self._event_counter = 0

    # trace helpers
    def record_event(self, time: int, etype: EventType, handle: Optional[int] = None, payload: Any = None):
        self._event_counter += 1
        label = self.registry[handle].label if handle is not None else None
        ev = Event(time=int(time), order=self._event_counter, type=etype, handle=handle, label=label, payload=payload)
        self.trace.append(ev)
        if self.verbose:
            self._print_event(ev)

    def _print_event(self, ev: Event):
        p = ev.payload or {}
        if ev.type == EventType.IDLE:
            print(f"[t={p['start']}] IDLE {p['start']}->{p['end']} waiting for {p['next']}")
        elif ev.type == EventType.DISPATCH:
            print(f"[t={ev.time}] DISPATCH {ev.label} (Q{p['level']}, q={p['quantum']}) "
                  f"for {p['slice']}u, remaining {p['remaining']}")
        elif ev.type == EventType.COMPLETE:
            print(f"[t={ev.time}] COMPLETE {ev.label}")

    def admit(self):
        for handle in self.registry.admit_until(self.current_time):
            self.queues.push(self.registry[handle].level, handle)

    def is_finished(self) -> bool:
        return self.completed >= len(self.registry)

    # main loop
    def run(self) -> SimulationResult:
        if self.verbose:
            print(f"--- MLQ dispatcher start ({len(self.registry)} processes) ---")
        while not self.is_finished():
            self.admit()
            selected = self.queues.peek_first_nonempty()
            if selected is None:
                if self.running is None and self.registry.has_unadmitted():
                    self._idle_until_next_arrival()
                    continue
                break
            self._dispatch(*selected)

        self.state = EngineState.TERMINATED
        if self.verbose:
            print(f"--- MLQ dispatcher end (makespan {self.current_time}) ---")
        return SimulationResult(
            makespan=self.current_time,
            processes=self.registry.records(),
            trace=list(self.trace),
            cpu_busy_time=self.cpu_busy_time,
        )

    def _idle_until_next_arrival(self):
        self.state = EngineState.IDLE
        start = self.current_time
        next_handle = self.registry.next_admission
        self.current_time = self.registry.next_arrival()
        self.record_event(start, EventType.IDLE, handle=next_handle, payload={
            'start': start,
            'end': self.current_time,
            'duration': self.current_time - start,
            'next': self.registry[next_handle].label,
        })

    def _dispatch(self, level, handle: int):
        self.state = EngineState.DISPATCHING
        self.queues.pop_front(level)
        self.running = handle
        p = self.registry[handle]

        start = self.current_time
        ran_for = p.run_slice(start)
        self.current_time += ran_for
        self.cpu_busy_time += ran_for
        self.record_event(start, EventType.DISPATCH, handle=handle, payload={
            'level': int(level),
            'quantum': level.quantum,
            'slice': ran_for,
            'remaining': p.burst_remaining,
        })

        # arrivals during the slice queue up ahead of the requeued process
        self.admit()

        if p.completed:
            p.complete(self.current_time)
            self.completed += 1
            self.record_event(self.current_time, EventType.COMPLETE, handle=handle, payload={
                'turnaround': p.turnaround_time,
                'waiting': p.waiting_time,
                'response': p.response_time,
            })
        else:
            self.queues.push(p.level, handle)
        self.running = None
