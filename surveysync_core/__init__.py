"""
surveysync_core package: survey extraction, probability allocation and
answer-state reconciliation.

Usage:
    from surveysync_core import SoupDocument, SurveySession

    session = SurveySession("abc123")
    session.extract_and_reconcile(SoupDocument.from_html(html))
"""
from .config import Config, config
from .dom import DocumentNode, SoupDocument, SurveyDocument
from .errors import MarkersFileError, SurveySyncError
from .markers import DEFAULT_MARKERS, SurveyMarkers
from .models import MatrixRow, Option, Question, QuestionType, ScaleOption
from .pipeline import extract_survey
from .probability import allocate_dropdown, allocate_grid_row, allocate_independent
from .reconciler import reconcile
from .events import (
    ChangeRecord, InputEvent, SurveyEvent,
    OptionToggled, TextEdited, DropdownChanged, ScaleChanged,
    classify_record,
)
from .observer import ChangeObserver
from .session import SurveySession, survey_id_from_url
from .persistence import SnapshotStore
from .answer_plan import PlannedAnswer, plan_answers

__all__ = [
    # Core
    "Config",
    "config",
    "SurveySyncError",
    "MarkersFileError",
    # Document access
    "DocumentNode",
    "SurveyDocument",
    "SoupDocument",
    "SurveyMarkers",
    "DEFAULT_MARKERS",
    # Model
    "Option",
    "MatrixRow",
    "ScaleOption",
    "Question",
    "QuestionType",
    # Pipeline
    "extract_survey",
    "allocate_independent",
    "allocate_grid_row",
    "allocate_dropdown",
    "reconcile",
    # Change tracking
    "ChangeRecord",
    "InputEvent",
    "SurveyEvent",
    "OptionToggled",
    "TextEdited",
    "DropdownChanged",
    "ScaleChanged",
    "classify_record",
    "ChangeObserver",
    "SurveySession",
    "survey_id_from_url",
    "SnapshotStore",
    "PlannedAnswer",
    "plan_answers",
]
