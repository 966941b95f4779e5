"""Machine Probe"""

from dataclasses import dataclass, field
from typing import List

from .serialisable import TandemSerialisable, now_str


@dataclass(frozen=True)
class ProbeLog(TandemSerialisable):
    vmid: int
    text: str
    time: str = field(default_factory=now_str)


@dataclass(frozen=True)
class ProbeEvent(TandemSerialisable):
    vmid: int
    event: str
    data: dict
    time: str = field(default_factory=now_str)


class Probe:
    """A small interface for storing machine logs and events"""

    def __init__(self, vmid, enabled=True):
        self.vmid = vmid
        self.enabled = enabled
        self.logs: List[ProbeLog] = []
        self.events: List[ProbeEvent] = []

    def event(self, etype: str, **data):
        if self.enabled:
            self.events.append(ProbeEvent(vmid=self.vmid, event=etype, data=data))

    def log(self, text):
        if self.enabled:
            self.logs.append(ProbeLog(vmid=self.vmid, text=text))

    def event_names(self) -> List[str]:
        return [e.event for e in self.events]
