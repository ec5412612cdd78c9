"""
Survey Models - Data structures for extracted surveys

Contains:
- QuestionType enum - the recognised question archetypes
- Option / MatrixRow / ScaleOption - answer containers
- Question - one extracted question

Records serialize to the camelCase, JSON-compatible shape used by the
persistence and UI collaborators.
"""

import copy
import hashlib
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


class QuestionType(str, Enum):
    """Question archetypes, in classifier priority order."""
    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    GRID_SINGLE = "grid-single"
    GRID_MULTI = "grid-multi"
    FREE_TEXT = "free-text"
    DROPDOWN = "dropdown"
    SCALE = "scale"
    UNRECOGNIZED = "unrecognized"

    @property
    def is_choice(self) -> bool:
        return self in (QuestionType.SINGLE_CHOICE, QuestionType.MULTI_CHOICE)

    @property
    def is_grid(self) -> bool:
        return self in (QuestionType.GRID_SINGLE, QuestionType.GRID_MULTI)


Probability = Union[int, float]


@dataclass
class Option:
    value: str = ""
    text: str = ""
    is_selected: bool = False
    probability: Probability = 0
    has_auxiliary_input: bool = False
    auxiliary_inputs: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "text": self.text,
            "isSelected": self.is_selected,
            "probability": self.probability,
            "hasAuxiliaryInput": self.has_auxiliary_input,
            "auxiliaryInputs": list(self.auxiliary_inputs),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Option":
        return cls(
            value=str(data.get("value", "")),
            text=str(data.get("text", "")),
            is_selected=bool(data.get("isSelected", False)),
            probability=data.get("probability", 0),
            has_auxiliary_input=bool(data.get("hasAuxiliaryInput", False)),
            auxiliary_inputs=[str(v) for v in data.get("auxiliaryInputs") or []],
        )


@dataclass
class MatrixRow:
    title: str = ""
    options: List[Option] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "options": [o.to_dict() for o in self.options]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatrixRow":
        return cls(
            title=str(data.get("title", "")),
            options=[Option.from_dict(o) for o in data.get("options") or []],
        )


@dataclass
class ScaleOption:
    value: int = 0
    label: str = ""
    is_selected: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "label": self.label, "isSelected": self.is_selected}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScaleOption":
        try:
            value = int(data.get("value", 0))
        except (TypeError, ValueError):
            value = 0
        return cls(value=value, label=str(data.get("label", "")), is_selected=bool(data.get("isSelected", False)))


@dataclass
class Question:
    """One extracted question.

    Which answer fields are populated depends on ``type``:
    choice -> options, grid -> headers + rows, free-text -> free_text_*,
    dropdown -> dropdown_options + selected_dropdown_value,
    scale -> options (ScaleOption) + min/max labels, unrecognized -> raw_content.
    """
    index: int
    title: str
    type: QuestionType
    options: Optional[List[Any]] = None
    rows: Optional[List[MatrixRow]] = None
    headers: Optional[List[str]] = None
    free_text_value: Optional[str] = None
    free_text_id: Optional[str] = None
    free_text_inputs: Optional[List[Dict[str, str]]] = None
    dropdown_options: Optional[List[Option]] = None
    selected_dropdown_value: Optional[str] = None
    min_label: Optional[str] = None
    max_label: Optional[str] = None
    raw_content: Optional[str] = None

    def copy(self) -> "Question":
        return copy.deepcopy(self)

    def fingerprint(self) -> str:
        """Short stable key built from title, archetype and answer-list size."""
        if self.type.is_grid:
            size = len(self.rows or [])
        elif self.type == QuestionType.DROPDOWN:
            size = len(self.dropdown_options or [])
        else:
            size = len(self.options or [])
        raw = f"{self.title.strip()}|{self.type.value}|{size}"
        return hashlib.sha1(raw.encode("utf-8")).hexdigest()[:12]

    def is_answered(self) -> bool:
        """Completeness rule; dropdown, scale and unrecognized never count as unanswered."""
        if self.type.is_choice:
            return any(o.is_selected for o in self.options or [])
        if self.type.is_grid:
            return all(any(o.is_selected for o in row.options) for row in self.rows or [])
        if self.type == QuestionType.FREE_TEXT:
            return bool((self.free_text_value or "").strip())
        return True

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"index": self.index, "title": self.title, "type": self.type.value}
        if self.type.is_choice or self.type == QuestionType.SCALE:
            data["options"] = [o.to_dict() for o in self.options or []]
        if self.type == QuestionType.SCALE:
            data["minLabel"] = self.min_label or ""
            data["maxLabel"] = self.max_label or ""
        if self.type.is_grid:
            data["headers"] = list(self.headers or [])
            data["rows"] = [r.to_dict() for r in self.rows or []]
        if self.type == QuestionType.FREE_TEXT:
            data["freeTextValue"] = self.free_text_value or ""
            data["freeTextId"] = self.free_text_id or ""
            data["freeTextInputs"] = [dict(i) for i in self.free_text_inputs or []]
        if self.type == QuestionType.DROPDOWN:
            data["dropdownOptions"] = [o.to_dict() for o in self.dropdown_options or []]
            data["selectedDropdownValue"] = self.selected_dropdown_value or ""
        if self.type == QuestionType.UNRECOGNIZED:
            data["rawContent"] = self.raw_content or ""
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        try:
            qtype = QuestionType(data.get("type", QuestionType.UNRECOGNIZED.value))
        except ValueError:
            qtype = QuestionType.UNRECOGNIZED
        question = cls(index=int(data.get("index", 0)), title=str(data.get("title", "")), type=qtype)
        if "options" in data:
            factory = ScaleOption.from_dict if qtype == QuestionType.SCALE else Option.from_dict
            question.options = [factory(o) for o in data.get("options") or []]
        if "rows" in data:
            question.rows = [MatrixRow.from_dict(r) for r in data.get("rows") or []]
        if "headers" in data:
            question.headers = [str(h) for h in data.get("headers") or []]
        if "freeTextValue" in data:
            question.free_text_value = str(data.get("freeTextValue") or "")
            question.free_text_id = str(data.get("freeTextId") or "")
            question.free_text_inputs = [
                {"value": str(i.get("value", ""))} for i in data.get("freeTextInputs") or []
            ]
        if "dropdownOptions" in data:
            question.dropdown_options = [Option.from_dict(o) for o in data.get("dropdownOptions") or []]
            question.selected_dropdown_value = str(data.get("selectedDropdownValue") or "")
        if "minLabel" in data or "maxLabel" in data:
            question.min_label = str(data.get("minLabel") or "")
            question.max_label = str(data.get("maxLabel") or "")
        if "rawContent" in data:
            question.raw_content = str(data.get("rawContent") or "")
        return question


def snapshot_to_records(questions: List[Question]) -> List[Dict[str, Any]]:
    return [q.to_dict() for q in questions]


def snapshot_from_records(records: List[Dict[str, Any]]) -> List[Question]:
    return [Question.from_dict(r) for r in records if isinstance(r, dict)]
