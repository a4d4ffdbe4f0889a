# rxnotes/services/abbreviations.py
import logging
import re
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from rxnotes.utils.text import upper_first

logger = logging.getLogger(__name__)

FREQUENCY_ABBREVIATIONS: Mapping[str, str] = MappingProxyType({
    "OD": "Once daily",
    "QD": "Once daily",
    "BD": "Twice daily",
    "BID": "Twice daily",
    "TDS": "Three times daily",
    "TID": "Three times daily",
    "QID": "Four times daily",
    "QDS": "Four times daily",
    "Q4H": "Every 4 hours",
    "Q6H": "Every 6 hours",
    "Q8H": "Every 8 hours",
    "Q12H": "Every 12 hours",
    "HS": "At bedtime",
    "QHS": "Every night at bedtime",
    "PRN": "As needed",
    "SOS": "As needed (if necessary)",
    "STAT": "Immediately",
    "QOD": "Every other day",
    "QWK": "Once weekly",
    "BIW": "Twice weekly",
})

MEAL_TIMING_ABBREVIATIONS: Mapping[str, str] = MappingProxyType({
    "AC": "Before meals",
    "PC": "After meals",
    "CC": "With meals",
    "HS": "At bedtime",
    "AM": "In the morning",
    "PM": "In the evening",
    "MANE": "In the morning",
    "NOCTE": "At night",
})

ROUTE_ABBREVIATIONS: Mapping[str, str] = MappingProxyType({
    "PO": "By mouth (oral)",
    "SL": "Under the tongue (sublingual)",
    "PR": "Rectally",
    "IM": "Intramuscular injection",
    "IV": "Intravenous",
    "SC": "Subcutaneous injection",
    "ID": "Intradermal",
    "TOP": "Topical (on skin)",
    "INH": "Inhalation",
    "NEB": "Nebulizer",
    "OPH": "Ophthalmic (eye)",
    "OT": "Otic (ear)",
    "NAS": "Nasal",
})

FORM_ABBREVIATIONS: Mapping[str, str] = MappingProxyType({
    "TAB": "Tablet",
    "CAP": "Capsule",
    "SYR": "Syrup",
    "SUSP": "Suspension",
    "SOL": "Solution",
    "INJ": "Injection",
    "CR": "Controlled release",
    "SR": "Sustained release",
    "XR": "Extended release",
    "ER": "Extended release",
    "DR": "Delayed release",
    "SUPP": "Suppository",
    "OINT": "Ointment",
    "CRM": "Cream",
    "LOT": "Lotion",
    "GEL": "Gel",
    "DROP": "Drops",
    "GTT": "Drops",
})

# merge order; category names only show up in collision errors
DEFAULT_CATEGORIES: Tuple[Tuple[str, Mapping[str, str]], ...] = (
    ("frequency", FREQUENCY_ABBREVIATIONS),
    ("meal_timing", MEAL_TIMING_ABBREVIATIONS),
    ("route", ROUTE_ABBREVIATIONS),
    ("form", FORM_ABBREVIATIONS),
)

class AbbreviationCollisionError(ValueError):
    pass

def merge_tables(categories: Iterable[Tuple[str, Mapping[str, str]]]) -> Dict[str, str]:
    """
    Merge category tables into one upper-cased lookup space.
    A code listed twice with the same phrase is fine (HS is both a frequency
    and a meal-timing code); a code listed with two different phrases raises.
    """
    merged: Dict[str, str] = {}
    owner: Dict[str, str] = {}
    for category, table in categories:
        for code, phrase in table.items():
            key = code.strip().upper()
            if key in merged and merged[key] != phrase:
                raise AbbreviationCollisionError(
                    f"{key!r} is {merged[key]!r} in {owner[key]} but {phrase!r} in {category}"
                )
            merged.setdefault(key, phrase)
            owner.setdefault(key, category)
    return merged

class AbbreviationDictionary:
    """Read-only code -> phrase lookup. Safe to share across threads."""

    def __init__(self, categories: Iterable[Tuple[str, Mapping[str, str]]] = DEFAULT_CATEGORIES):
        self._table: Mapping[str, str] = MappingProxyType(merge_tables(categories))

        # longest codes first so QDS is tried before QD
        codes = sorted(self._table, key=lambda c: (-len(c), c))
        self._pattern: Optional[re.Pattern] = None
        if codes:
            alternation = "|".join(re.escape(c) for c in codes)
            self._pattern = re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)
        logger.debug("abbreviation dictionary ready: %d codes", len(self._table))

    @property
    def table(self) -> Mapping[str, str]:
        return self._table

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.strip().upper() in self._table

    def __len__(self) -> int:
        return len(self._table)

    def expand_one(self, code: Optional[str]) -> Optional[str]:
        if not code:
            return code
        return self._table.get(code.strip().upper(), code)

    def expand_all(self, text: Optional[str]) -> Optional[str]:
        # single pass: a phrase that was just inserted is never re-scanned
        if not text or self._pattern is None:
            return text
        return self._pattern.sub(lambda m: self._table[m.group(0).upper()], text)

DEFAULT_DICTIONARY = AbbreviationDictionary()

def _lookup(dictionary: Optional[AbbreviationDictionary]) -> AbbreviationDictionary:
    return DEFAULT_DICTIONARY if dictionary is None else dictionary

def expand_one(code: Optional[str], dictionary: Optional[AbbreviationDictionary] = None) -> Optional[str]:
    """Phrase for an exact (case-insensitive) code, or the code unchanged."""
    return _lookup(dictionary).expand_one(code)

def expand_all(text: Optional[str], dictionary: Optional[AbbreviationDictionary] = None) -> Optional[str]:
    """Replace every whole-word code in free text with its phrase."""
    return _lookup(dictionary).expand_all(text)

def format_frequency(frequency: Optional[str], dictionary: Optional[AbbreviationDictionary] = None) -> str:
    if not frequency:
        return "Not specified"
    expanded = expand_one(frequency, dictionary)
    if expanded != frequency:
        return f"{expanded} ({frequency})"
    return frequency

def format_food_instruction(instruction: Optional[str], dictionary: Optional[AbbreviationDictionary] = None) -> str:
    if not instruction:
        return "No specific instructions"
    return upper_first(expand_all(instruction, dictionary))
