"""Core data schema for campaign schedule events and tasks."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

RawRow = Mapping[str, Any]

MAIL = "mail"
TEXT = "text"
VM = "vm"


@dataclass(frozen=True)
class ChannelFlags:
    """Channels a campaign row goes out on."""

    has_mail: bool
    has_text: bool
    has_vm: bool


@dataclass(frozen=True)
class NormalizedEvent:
    """Normalized campaign event record used by all modules."""

    row_index: int
    event_date: date
    has_mail: bool
    has_text: bool
    has_vm: bool
    count: int
    campaign: str
    category: str
    part: str
    batch: str
    batch_num: Optional[int]
    cost: float
    county: str = ""


@dataclass(frozen=True)
class ScheduledTask:
    """One mail, text or voicemail action derived from an event."""

    type: str
    date: date
    identity_key: str
    count: int
    label: str
    event: NormalizedEvent
    stage: Optional[str] = None


@dataclass(frozen=True)
class MonthTotal:
    key: str
    year: int
    month: int
    total: int


@dataclass(frozen=True)
class WeekTotal:
    start: date
    end: date
    total: int


@dataclass(frozen=True)
class CadenceGroupRow:
    """First dates and overall volume of one campaign + part group."""

    key: str
    dates: tuple
    total: int


@dataclass(frozen=True)
class WeekWindow:
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class WeekWindows:
    """This week, next week and the week after, Monday through Sunday."""

    this: WeekWindow
    next: WeekWindow
    next2: WeekWindow
