from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional


class EventType(Enum):
    IDLE = auto()        # CPU idle until the next arrival
    DISPATCH = auto()    # one execution slice
    COMPLETE = auto()    # process finished its burst


@dataclass
class Event:
    time: int
    order: int
    type: EventType
    handle: Optional[int] = None
    label: Optional[str] = None
    payload: Any = None

    def __repr__(self):
        return f"Event(time={self.time}, type={self.type}, label={self.label}, payload={self.payload})"
