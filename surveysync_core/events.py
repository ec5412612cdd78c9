"""
Change events - raw document change records and their semantic meaning

The browser delivers ``ChangeRecord`` batches (one per mutation) and
``InputEvent`` objects (one per native input event). ``classify_record``
translates a record into one of four semantic events, or None when the
change does not affect any answer. Nothing downstream of this module
inspects class tokens.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .markers import DEFAULT_MARKERS, SurveyMarkers

ATTRIBUTES = "attributes"
CHARACTER_DATA = "characterData"
CHILD_LIST = "childList"


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class ChangeRecord:
    """One serialized mutation record."""
    kind: str
    target_tag: str = ""
    target_classes: List[str] = field(default_factory=list)
    attribute_name: Optional[str] = None
    parent_tag: Optional[str] = None
    in_scale_list: bool = False
    question_index: Optional[int] = None
    value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChangeRecord":
        classes = data.get("targetClasses") or []
        if isinstance(classes, str):
            classes = classes.split()
        return cls(
            kind=str(data.get("kind") or data.get("type") or ""),
            target_tag=str(data.get("targetTag") or "").lower(),
            target_classes=[str(c) for c in classes],
            attribute_name=data.get("attributeName"),
            parent_tag=(str(data["parentTag"]).lower() if data.get("parentTag") else None),
            in_scale_list=bool(data.get("inScaleList", False)),
            question_index=_optional_int(data.get("questionIndex")),
            value=data.get("value"),
        )


@dataclass
class InputEvent:
    """A native ``input`` event from a form control."""
    target_tag: str
    question_index: Optional[int] = None
    input_type: str = ""
    value: str = ""

    def targets_free_text(self, markers: SurveyMarkers = DEFAULT_MARKERS) -> bool:
        """Only free-text controls count; aux inputs inside choice options do not."""
        return self.target_tag == markers.free_text

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InputEvent":
        return cls(
            target_tag=str(data.get("targetTag") or "").lower(),
            question_index=_optional_int(data.get("questionIndex")),
            input_type=str(data.get("inputType") or "").lower(),
            value=str(data.get("value") or ""),
        )


@dataclass(frozen=True)
class SurveyEvent:
    question_index: Optional[int]


@dataclass(frozen=True)
class OptionToggled(SurveyEvent):
    multi: bool = False


@dataclass(frozen=True)
class TextEdited(SurveyEvent):
    value: str = ""


@dataclass(frozen=True)
class DropdownChanged(SurveyEvent):
    label: str = ""


@dataclass(frozen=True)
class ScaleChanged(SurveyEvent):
    pass


def classify_record(record: ChangeRecord, markers: SurveyMarkers = DEFAULT_MARKERS) -> Optional[SurveyEvent]:
    classes = set(record.target_classes)
    index = record.question_index

    if record.kind == ATTRIBUTES:
        if markers.checked_state in classes:
            if markers.radio_role in classes:
                return OptionToggled(index, multi=False)
            if markers.checkbox_role in classes:
                return OptionToggled(index, multi=True)
        if (record.attribute_name == markers.rendered_selection_attr
                and markers.rendered_selection_label in classes):
            return DropdownChanged(index, label=record.value or "")
        if record.attribute_name == "class" and record.target_tag == markers.scale_item and record.in_scale_list:
            return ScaleChanged(index)

    if record.kind == CHARACTER_DATA and record.parent_tag == markers.free_text:
        return TextEdited(index, value=record.value or "")

    return None
