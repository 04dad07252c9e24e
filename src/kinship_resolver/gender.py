"""Gendered kinship labels.

Each neutral label the catalog can produce gets its own entry in a lookup
table, e.g. ``"Great-great-grandparent-in-law"`` maps to
``("Great-great-grandfather-in-law", "Great-great-grandmother-in-law")``.
Entries are derived once from the hyphen-separated words of each label;
at resolution time gendering is a plain dictionary lookup.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType

from .models import Gender

# Neutral word -> (male, female)
GENDERED_WORDS: Mapping[str, tuple[str, str]] = MappingProxyType({
    "parent": ("father", "mother"),
    "child": ("son", "daughter"),
    "grandparent": ("grandfather", "grandmother"),
    "grandchild": ("grandson", "granddaughter"),
    "sibling": ("brother", "sister"),
    "pibling": ("uncle", "aunt"),
    "nibling": ("nephew", "niece"),
    "spouse": ("husband", "wife"),
})


def _match_case(word: str, like: str) -> str:
    return word.capitalize() if like[:1].isupper() else word


def gendered_forms(label: str) -> tuple[str, str] | None:
    """Derive (male, female) forms of a neutral label, or None if it has none."""
    male: list[str] = []
    female: list[str] = []
    changed = False
    for part in label.split("-"):
        forms = GENDERED_WORDS.get(part.lower())
        if forms is None:
            male.append(part)
            female.append(part)
            continue
        changed = True
        male.append(_match_case(forms[0], part))
        female.append(_match_case(forms[1], part))
    if not changed:
        return None
    return "-".join(male), "-".join(female)


@dataclass(frozen=True)
class GenderTable:
    """Bidirectional neutral <-> gendered label table."""
    forms: Mapping[str, tuple[str, str]] = field(default_factory=dict)
    neutral: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_labels(cls, labels: Iterable[str]) -> GenderTable:
        forms: dict[str, tuple[str, str]] = {}
        neutral: dict[str, str] = {}
        for label in labels:
            pair = gendered_forms(label)
            if pair is None:
                continue
            forms[label] = pair
            for gendered in pair:
                neutral[gendered] = label
        return cls(forms=MappingProxyType(forms), neutral=MappingProxyType(neutral))

    def gendered(self, label: str, gender: Gender | str | None) -> str:
        pair = self.forms.get(label)
        if pair is None:
            return label
        if gender == Gender.MALE:
            return pair[0]
        if gender == Gender.FEMALE:
            return pair[1]
        return label

    def neutral_label(self, label: str) -> str:
        return self.neutral.get(label, label)


@lru_cache(maxsize=1)
def default_table() -> GenderTable:
    """Table covering every label in the default rule catalog."""
    from .rules import all_labels

    return GenderTable.from_labels(all_labels())


def gender_label(
    label: str,
    gender: Gender | str | None,
    apply_gender: bool = True,
    table: GenderTable | None = None,
) -> str:
    """Substitute the gendered form of a label.

    Non-binary or unset genders, labels without an entry, and
    ``apply_gender=False`` all return the label unchanged.
    """
    if not apply_gender or gender is None:
        return label
    return (table or default_table()).gendered(label, gender)


def neutral_label(label: str, table: GenderTable | None = None) -> str:
    """Map a gendered label back to its neutral form."""
    return (table or default_table()).neutral_label(label)
