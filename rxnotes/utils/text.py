# rxnotes/utils/text.py
from typing import Iterable, Optional

def first_present(values: Iterable[Optional[str]]) -> Optional[str]:
    for v in values:
        if v:
            return v
    return None

def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]
