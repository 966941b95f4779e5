"""TandemSerialisable class"""
import datetime
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class TandemSerialisable:
    """A basic serialisation mixin for (frozen) dataclasses"""

    def serialise(self) -> dict:
        """Produce a JSON-serialisable object"""
        return asdict(self)


def now_str() -> str:
    return datetime.datetime.now().isoformat()
