"""
Reconciler - merge a fresh extraction into the held snapshot

Text and values always come from the fresh extraction. Answer state
(selection flags, probabilities, typed text, dropdown choice) comes from
the held snapshot, except for positions listed in ``touched``: those
changed in the document because of the user, so the fresh state wins.

Questions are aligned by position by default. ``key="fingerprint"``
aligns them by ``Question.fingerprint()`` instead, which survives
questions being inserted or removed between extractions.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .models import MatrixRow, Question, QuestionType

logger = logging.getLogger(__name__)

POSITION = "position"
FINGERPRINT = "fingerprint"


def _carry_flags(old_options: Optional[list], new_options: Optional[list], with_probability: bool = True) -> None:
    """Copy is_selected (and probability) index-aligned; lists of different length keep fresh state."""
    if not old_options or not new_options or len(old_options) != len(new_options):
        return
    for old, new in zip(old_options, new_options):
        new.is_selected = old.is_selected
        if with_probability:
            new.probability = old.probability


def _carry_rows(old_rows: Optional[List[MatrixRow]], new_rows: Optional[List[MatrixRow]]) -> None:
    if not old_rows or not new_rows or len(old_rows) != len(new_rows):
        return
    for old, new in zip(old_rows, new_rows):
        _carry_flags(old.options, new.options)


def merge_question(old: Optional[Question], fresh: Question, user_changed: bool = False) -> Question:
    """Merge one aligned pair; the result never aliases ``old``."""
    merged = fresh.copy()
    if old is None or user_changed:
        return merged
    if old.type != fresh.type:
        logger.debug(f"Question {fresh.index} changed shape ({old.type.value} -> {fresh.type.value})")
        return merged

    held = old.copy()
    if merged.type.is_choice:
        _carry_flags(held.options, merged.options)
    elif merged.type == QuestionType.SCALE:
        _carry_flags(held.options, merged.options, with_probability=False)
    elif merged.type.is_grid:
        _carry_rows(held.rows, merged.rows)
    elif merged.type == QuestionType.FREE_TEXT:
        merged.free_text_value = held.free_text_value
        merged.free_text_inputs = held.free_text_inputs
    elif merged.type == QuestionType.DROPDOWN:
        merged.selected_dropdown_value = held.selected_dropdown_value
        _carry_flags(held.dropdown_options, merged.dropdown_options)
    return merged


def _align_by_fingerprint(previous: Sequence[Question], fresh: Sequence[Question]) -> List[Optional[Question]]:
    pool: Dict[str, List[Question]] = {}
    for question in previous:
        pool.setdefault(question.fingerprint(), []).append(question)
    aligned: List[Optional[Question]] = []
    for question in fresh:
        candidates = pool.get(question.fingerprint())
        aligned.append(candidates.pop(0) if candidates else None)
    return aligned


def reconcile(previous: Optional[Sequence[Question]], fresh: Sequence[Question],
              touched: Iterable[int] = (), key: str = POSITION) -> List[Question]:
    """Merge ``fresh`` into ``previous``.

    Args:
        previous: Held snapshot, may be empty or None
        fresh: Snapshot just extracted from the document
        touched: 1-based positions whose fresh state reflects a user change
        key: "position" or "fingerprint"

    Returns:
        New snapshot, one question per fresh question, in document order
    """
    if not previous:
        return [q.copy() for q in fresh]

    touched_set = set(touched)
    if key == FINGERPRINT:
        aligned = _align_by_fingerprint(previous, fresh)
    else:
        aligned = [previous[i] if i < len(previous) else None for i in range(len(fresh))]

    return [
        merge_question(old, new, user_changed=new.index in touched_set)
        for old, new in zip(aligned, fresh)
    ]
