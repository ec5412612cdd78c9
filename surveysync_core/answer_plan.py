"""
Answer Plan - turn selection likelihoods into concrete picks

The plan says *what* to answer; clicking and typing belong to the
simulation collaborator.

Usage:
    from surveysync_core.answer_plan import plan_answers

    plan = plan_answers(session.questions, rng=random.Random(7))
    plan[0].option_indices   # e.g. [2]
"""

import math
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .models import Question, QuestionType

MAX_MULTI_ATTEMPTS = 32


@dataclass
class PlannedAnswer:
    question_index: int
    type: QuestionType
    option_indices: List[int] = field(default_factory=list)
    row_choices: List[int] = field(default_factory=list)
    text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"questionIndex": self.question_index, "type": self.type.value}
        if self.type.is_grid:
            data["rowChoices"] = list(self.row_choices)
        elif self.type == QuestionType.FREE_TEXT:
            data["text"] = self.text or ""
        else:
            data["optionIndices"] = list(self.option_indices)
        return data


def _sanitize(weights: Sequence[Any]) -> List[float]:
    cleaned: List[float] = []
    for value in weights:
        try:
            weight = float(value)
        except (TypeError, ValueError):
            weight = 0.0
        if math.isnan(weight) or math.isinf(weight) or weight < 0.0:
            weight = 0.0
        cleaned.append(weight)
    return cleaned


def weighted_index(weights: Sequence[Any], rng: Optional[random.Random] = None) -> int:
    """Index drawn proportionally to ``weights``; uniform when every weight is zero."""
    if not weights:
        raise ValueError("weights cannot be empty")
    rng = rng or random.Random()
    cleaned = _sanitize(weights)
    total = sum(cleaned)
    if total <= 0.0:
        return rng.randrange(len(cleaned))

    pivot = rng.random() * total
    running = 0.0
    for index, weight in enumerate(cleaned):
        running += weight
        if pivot <= running:
            return index
    return len(cleaned) - 1


def _multi_pick(weights: Sequence[Any], rng: random.Random) -> List[int]:
    cleaned = [max(0.0, min(100.0, w)) for w in _sanitize(weights)]
    if not any(cleaned):
        cleaned = [100.0] * len(cleaned)
    for _ in range(MAX_MULTI_ATTEMPTS):
        picked = [i for i, w in enumerate(cleaned) if rng.random() < w / 100.0]
        if picked:
            return picked
    return [weighted_index(cleaned, rng)]


def plan_question(question: Question, rng: Optional[random.Random] = None) -> Optional[PlannedAnswer]:
    rng = rng or random.Random()
    plan = PlannedAnswer(question_index=question.index, type=question.type)

    if question.type == QuestionType.SINGLE_CHOICE and question.options:
        plan.option_indices = [weighted_index([o.probability for o in question.options], rng)]
    elif question.type == QuestionType.MULTI_CHOICE and question.options:
        plan.option_indices = _multi_pick([o.probability for o in question.options], rng)
    elif question.type.is_grid:
        plan.row_choices = [
            weighted_index([o.probability for o in row.options], rng) if row.options else -1
            for row in question.rows or []
        ]
    elif question.type == QuestionType.DROPDOWN and question.dropdown_options:
        plan.option_indices = [weighted_index([o.probability for o in question.dropdown_options], rng)]
    elif question.type == QuestionType.SCALE and question.options:
        selected = [i for i, o in enumerate(question.options) if o.is_selected]
        plan.option_indices = [selected[-1] if selected else rng.randrange(len(question.options))]
    elif question.type == QuestionType.FREE_TEXT:
        plan.text = question.free_text_value or ""
    else:
        return None
    return plan


def plan_answers(questions: Sequence[Question], rng: Optional[random.Random] = None) -> List[PlannedAnswer]:
    """One planned answer per answerable question; unrecognized questions are skipped."""
    rng = rng or random.Random()
    plans = []
    for question in questions:
        plan = plan_question(question, rng)
        if plan is not None:
            plans.append(plan)
    return plans
