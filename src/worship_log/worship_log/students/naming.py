"""Same-name disambiguation for newly added students.

Two students may share a display name. To keep attendance history readable,
same-named students are told apart by a single trailing letter (``KimA``,
``KimB``, ...). The first time a second ``Kim`` is added, the existing ``Kim``
is renamed so neither record keeps the bare name.

Everything here is pure: the caller fetches the candidates and performs the
writes the returned :class:`NamePlan` asks for.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.constants import SUFFIX_LETTERS
from ..core.enums import NameOutcome
from ..core.exceptions import NameSuffixExhausted
from .model import Student


@dataclass(frozen=True)
class RenamePlan:
    student_id: int
    old_name: str
    new_name: str
    old_label: str


@dataclass(frozen=True)
class NamePlan:
    base_name: str
    final_name: str
    outcome: NameOutcome
    rename: Optional[RenamePlan] = None
    conflict: Optional[Student] = None

    @property
    def requires_confirmation(self) -> bool:
        return self.conflict is not None


def suffix_pattern(base_name: str) -> "re.Pattern[str]":
    return re.compile(re.escape(base_name) + "[A-Z]")


def matching_students(base_name: str, candidates: Iterable[Student]) -> list[Student]:
    """Active candidates named exactly ``base_name`` or ``base_name`` plus one capital letter.

    Prefix search alone also returns names like ``Kimberly``; those are not
    suffix variants and are dropped here.
    """
    pattern = suffix_pattern(base_name)
    return [
        s
        for s in candidates
        if s.is_active and (s.name == base_name or pattern.fullmatch(s.name))
    ]


def _next_letter(highest: Optional[str], base_name: str) -> str:
    if highest is None:
        return SUFFIX_LETTERS[0]
    idx = SUFFIX_LETTERS.index(highest)
    if idx + 1 >= len(SUFFIX_LETTERS):
        raise NameSuffixExhausted(
            f'Every suffix {base_name}A-{base_name}Z is already in use; choose a more specific name'
        )
    return SUFFIX_LETTERS[idx + 1]


def _lowest_free_letter(used: set[str], base_name: str) -> str:
    for letter in SUFFIX_LETTERS:
        if letter not in used:
            return letter
    raise NameSuffixExhausted(
        f'Every suffix {base_name}A-{base_name}Z is already in use; choose a more specific name'
    )


def plan_new_student_name(base_name: str, candidates: Sequence[Student]) -> NamePlan:
    """Decide the name a new student named ``base_name`` is stored under.

    - no exact or suffixed match: ``base_name`` is kept;
    - only suffixed matches: the next letter after the highest one in use,
      existing records are left alone;
    - an exact match: the operator must confirm it is a different person.
      The new student takes the next letter after the highest in use (``B``
      when there were none) and the existing record is renamed to ``A``, or
      to the lowest letter still free when ``A`` is taken.
    """
    matches = matching_students(base_name, candidates)
    exact = next((s for s in matches if s.name == base_name), None)
    used = {s.name[len(base_name):] for s in matches if s.name != base_name}
    highest = max(used) if used else None

    if exact is None and not used:
        return NamePlan(base_name=base_name, final_name=base_name, outcome=NameOutcome.UNCHANGED)

    if exact is None:
        letter = _next_letter(highest, base_name)
        return NamePlan(
            base_name=base_name,
            final_name=base_name + letter,
            outcome=NameOutcome.AUTO_SUFFIXED,
        )

    if highest is None:
        new_letter, old_letter = "B", "A"
    else:
        new_letter = _next_letter(highest, base_name)
        old_letter = _lowest_free_letter(used | {new_letter}, base_name)

    return NamePlan(
        base_name=base_name,
        final_name=base_name + new_letter,
        outcome=NameOutcome.PROMOTED,
        rename=RenamePlan(
            student_id=exact.student_id,
            old_name=exact.name,
            new_name=base_name + old_letter,
            old_label=f"{exact.placement_label}-{exact.name}",
        ),
        conflict=exact,
    )
