"""
Survey Session - the held snapshot and every operation that changes it

The session is the only owner of the snapshot. Extraction, allocation
and reconciliation stay side-effect free; the session calls the injected
``persist`` callback exactly once per externally visible mutation.

Usage:
    from surveysync_core.session import SurveySession, survey_id_from_url
    from surveysync_core.persistence import SnapshotStore

    store = SnapshotStore()
    session = SurveySession(survey_id_from_url(url), persist=store.persist)
    session.load(document, store.load(session.survey_id))
    session.extract_and_reconcile(document, touched=[3])
"""

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional

from .config import config
from .dom.base import SurveyDocument
from .markers import DEFAULT_MARKERS, SurveyMarkers
from .models import MatrixRow, Option, Question, QuestionType, snapshot_from_records, snapshot_to_records
from .pipeline import extract_survey
from .reconciler import reconcile

logger = logging.getLogger(__name__)

DEFAULT_SURVEY_ID = "default"
_SURVEY_ID_PATTERN = re.compile(r"/vj/([^./?#]+)\.[A-Za-z0-9]+")

PersistCallback = Callable[[str, List[Dict[str, Any]]], None]


def survey_id_from_url(url: Optional[str]) -> str:
    """``https://www.wjx.cn/vj/abc123.aspx`` -> ``abc123``; ``default`` when absent."""
    match = _SURVEY_ID_PATTERN.search(url or "")
    return match.group(1) if match else DEFAULT_SURVEY_ID


class SurveySession:
    """Held snapshot plus the pipeline, reconciler and mutators around it."""

    def __init__(
        self,
        survey_id: str = DEFAULT_SURVEY_ID,
        persist: Optional[PersistCallback] = None,
        markers: SurveyMarkers = DEFAULT_MARKERS,
        normalize_grid_rows: Optional[bool] = None,
        reconcile_key: Optional[str] = None,
    ):
        self.survey_id = survey_id
        self.markers = markers
        self.normalize_grid_rows = config.normalize_grid_rows if normalize_grid_rows is None else normalize_grid_rows
        self.reconcile_key = reconcile_key or config.reconcile_key
        self._persist = persist
        self._questions: List[Question] = []

    @property
    def questions(self) -> List[Question]:
        return self._questions

    def to_records(self) -> List[Dict[str, Any]]:
        return snapshot_to_records(self._questions)

    def save(self) -> None:
        if self._persist is not None:
            self._persist(self.survey_id, self.to_records())

    # ------------------------------------------------------------------
    # Pipeline entry points
    # ------------------------------------------------------------------

    def extract(self, document: SurveyDocument) -> List[Question]:
        return extract_survey(document, self.markers, self.normalize_grid_rows)

    def extract_and_reconcile(self, document: SurveyDocument, touched: Iterable[int] = ()) -> List[Question]:
        """Full pipeline run: re-extract everything, merge into the held snapshot, persist."""
        fresh = self.extract(document)
        self._questions = reconcile(self._questions, fresh, touched=touched, key=self.reconcile_key)
        self.save()
        return self._questions

    def reset(self, document: SurveyDocument) -> List[Question]:
        """Discard the held snapshot and rebuild it from the document."""
        logger.info(f"Resetting survey {self.survey_id}")
        self._questions = []
        return self.extract_and_reconcile(document)

    def load(self, document: SurveyDocument, saved_records: Optional[List[Dict[str, Any]]] = None) -> List[Question]:
        """Adopt a persisted snapshot when there is one, else extract from the document."""
        if saved_records:
            self._questions = snapshot_from_records(saved_records)
            logger.info(f"Loaded {len(self._questions)} saved questions for survey {self.survey_id}")
            return self._questions
        return self.extract_and_reconcile(document)

    # ------------------------------------------------------------------
    # Mutators (1-based question index)
    # ------------------------------------------------------------------

    def get_question(self, index: int) -> Optional[Question]:
        return next((q for q in self._questions if q.index == index), None)

    def replace_question(self, index: int, question: Question) -> bool:
        for pos, current in enumerate(self._questions):
            if current.index == index:
                self._questions[pos] = question
                self.save()
                return True
        logger.debug(f"replace_question: no question {index}")
        return False

    def update_options(self, index: int, options: List[Any]) -> bool:
        question = self.get_question(index)
        if question is None or not (question.type.is_choice or question.type == QuestionType.SCALE):
            return False
        question.options = options
        self.save()
        return True

    def update_rows(self, index: int, rows: List[MatrixRow]) -> bool:
        question = self.get_question(index)
        if question is None or not question.type.is_grid:
            return False
        question.rows = rows
        self.save()
        return True

    def set_free_text(self, index: int, value: str) -> bool:
        question = self.get_question(index)
        if question is None or question.type != QuestionType.FREE_TEXT:
            return False
        question.free_text_value = value
        question.free_text_inputs = [{"value": value}]
        self.save()
        return True

    def set_dropdown_selection(self, index: int, value: str) -> bool:
        question = self.get_question(index)
        if question is None or question.type != QuestionType.DROPDOWN:
            return False
        options: List[Option] = question.dropdown_options or []
        if options and not any(o.value == value for o in options):
            return False
        question.selected_dropdown_value = value
        for option in options:
            option.is_selected = option.value == value
            option.probability = 100 if option.is_selected else 0
        self.save()
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_unanswered_questions(self) -> bool:
        return any(not q.is_answered() for q in self._questions)

    def unanswered_indices(self) -> List[int]:
        return [q.index for q in self._questions if not q.is_answered()]
