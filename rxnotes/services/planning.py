# rxnotes/services/planning.py
from typing import Dict, List, Optional, Sequence

from rxnotes.schemas.models import TIMING_SLOTS, Medication, Schedule, ScheduleItem
from rxnotes.services.timing import DEFAULT_RESOLVER, TimingResolver
from rxnotes.utils.text import first_present

def schedule_label(med: Medication) -> str:
    return f"{med.name} {med.strength}" if med.strength else med.name

def schedule_item(med: Medication) -> ScheduleItem:
    return ScheduleItem(
        name=schedule_label(med),
        dose=med.dose,
        instructions=first_present([med.food_instruction, *(med.instructions or [])[:1]]),
    )

def build_schedule(meds: Sequence[Medication], resolver: Optional[TimingResolver] = None) -> Schedule:
    """
    Group medications into the five day-part buckets.

    A medication lands once in every slot it occupies (a BD drug shows up in
    both morning and night). Order inside a bucket follows the input list.
    Every bucket is present, empty or not.
    """
    resolver = resolver or DEFAULT_RESOLVER
    buckets: Dict[str, List[ScheduleItem]] = {slot: [] for slot in TIMING_SLOTS}

    for m in meds:
        for slot in resolver.timing_for(m):
            buckets[slot].append(schedule_item(m))

    return Schedule(**buckets)
