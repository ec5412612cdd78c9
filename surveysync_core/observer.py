"""
Change Observer - turns document change batches into reconciliation runs

The observer never touches the snapshot itself. For each batch that
contains at least one answer-relevant change it asks the session to
re-extract the whole document and reconcile, then reports the highest
affected question position to ``on_question_changed``.

Batches are handled synchronously and to completion, in delivery order;
the last reconciliation wins.
"""

import logging
from typing import Callable, Iterable, List, Optional

from .dom.base import SurveyDocument
from .events import ChangeRecord, InputEvent, SurveyEvent, TextEdited, classify_record
from .session import SurveySession

logger = logging.getLogger(__name__)

DocumentProvider = Callable[[], Optional[SurveyDocument]]
QuestionChangedCallback = Callable[[int], None]


class ChangeObserver:
    def __init__(
        self,
        session: SurveySession,
        document_provider: Optional[DocumentProvider] = None,
        on_question_changed: Optional[QuestionChangedCallback] = None,
    ):
        self.session = session
        self.document_provider = document_provider
        self.on_question_changed = on_question_changed
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self, document: Optional[SurveyDocument] = None) -> bool:
        """Attach once the survey region exists; returns False (and stays detached) until then."""
        document = document if document is not None else self._current_document()
        if document is None or document.region(self.session.markers.region_id) is None:
            logger.debug("Survey region not available yet; attachment deferred")
            return False
        self._attached = True
        logger.debug(f"Observer attached to survey {self.session.survey_id}")
        return True

    def detach(self) -> None:
        self._attached = False

    def _current_document(self) -> Optional[SurveyDocument]:
        return self.document_provider() if self.document_provider is not None else None

    def relevant_events(self, records: Iterable[ChangeRecord]) -> List[SurveyEvent]:
        markers = self.session.markers
        events = []
        for record in records:
            event = classify_record(record, markers)
            if event is not None:
                events.append(event)
        return events

    def handle_batch(self, records: Iterable[ChangeRecord],
                     document: Optional[SurveyDocument] = None) -> Optional[int]:
        """Process one change batch; returns the reported question index, if any."""
        if not self._attached:
            logger.debug("Ignoring change batch while detached")
            return None
        events = self.relevant_events(records)
        if not events:
            return None
        return self._reconcile(events, document)

    def handle_input(self, event: InputEvent, document: Optional[SurveyDocument] = None) -> Optional[int]:
        """Keystroke-level path for free-text fields, independent of mutation batches."""
        if not self._attached or not event.targets_free_text(self.session.markers):
            return None
        return self._reconcile([TextEdited(event.question_index, value=event.value)], document)

    def _reconcile(self, events: List[SurveyEvent], document: Optional[SurveyDocument]) -> Optional[int]:
        document = document if document is not None else self._current_document()
        if document is None:
            logger.warning("No document available for reconciliation")
            return None

        touched = {e.question_index for e in events if e.question_index is not None}
        self.session.extract_and_reconcile(document, touched=touched)

        changed = max(touched) if touched else None
        logger.debug(f"Reconciled after {len(events)} relevant changes; changed question: {changed}")
        if changed is not None and self.on_question_changed is not None:
            self.on_question_changed(changed)
        return changed
