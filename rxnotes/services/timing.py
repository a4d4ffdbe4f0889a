# rxnotes/services/timing.py
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from rxnotes.schemas.models import TIMING_SLOTS, Medication, TimingSlot

Slots = Tuple[TimingSlot, ...]

FREQUENCY_TIMING: Mapping[str, Slots] = MappingProxyType({
    "OD": ("morning",),
    "QD": ("morning",),
    "MANE": ("morning",),
    "AM": ("morning",),
    "BD": ("morning", "night"),
    "BID": ("morning", "night"),
    "TDS": ("morning", "afternoon", "night"),
    "TID": ("morning", "afternoon", "night"),
    "QID": ("morning", "afternoon", "evening", "night"),
    "QDS": ("morning", "afternoon", "evening", "night"),
    "HS": ("night",),
    "QHS": ("night",),
    "NOCTE": ("night",),
    "PRN": ("as_needed",),
    "SOS": ("as_needed",),
})

# Unknown, garbage and missing codes all land here. There is no
# "unscheduled" bucket; pass a different default to change that policy.
DEFAULT_TIMING: Slots = ("morning",)

def _check_slots(slots: Iterable[str], where: str) -> None:
    bad = [s for s in slots if s not in TIMING_SLOTS]
    if bad:
        raise ValueError(f"{where}: unknown timing slots {bad}")

class TimingResolver:
    def __init__(self, table: Mapping[str, Slots] = FREQUENCY_TIMING, default: Slots = DEFAULT_TIMING):
        if not default:
            raise ValueError("default timing must name at least one slot")
        _check_slots(default, "default")
        for code, slots in table.items():
            if not slots:
                raise ValueError(f"{code}: empty timing")
            _check_slots(slots, code)
        self._table: Mapping[str, Slots] = MappingProxyType({k.strip().upper(): tuple(v) for k, v in table.items()})
        self._default: Slots = tuple(default)

    @property
    def default(self) -> Slots:
        return self._default

    def resolve(self, frequency: Optional[str]) -> Slots:
        """Day-parts for a frequency code. Never empty, never raises."""
        code = frequency.strip().upper() if isinstance(frequency, str) else ""
        return self._table.get(code, self._default)

    def timing_for(self, med: Medication) -> Slots:
        # explicit timing always wins over the frequency lookup
        if med.timing:
            return tuple(med.timing)
        return self.resolve(med.frequency)

DEFAULT_RESOLVER = TimingResolver()

def resolve_timing(frequency: Optional[str]) -> Slots:
    return DEFAULT_RESOLVER.resolve(frequency)
