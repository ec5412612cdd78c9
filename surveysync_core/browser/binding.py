"""
Live Survey Binding - feeds browser mutations into a ChangeObserver

Usage:
    async with LiveSurveyBinding(page, session, on_question_changed=print) as binding:
        await binding.wait_attached(timeout=30)
        ...  # user interacts with the page; session stays in sync

The page-side script defers attachment until the survey region exists.
Every callback from the page is serialized through one lock, so a
reconciliation always runs to completion before the next one starts.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError

from ..dom.live import snapshot_live_page
from ..events import ChangeRecord, InputEvent
from ..observer import ChangeObserver, QuestionChangedCallback
from ..session import SurveySession
from .scripts import INSTALL_OBSERVER_JS, UNINSTALL_OBSERVER_JS

logger = logging.getLogger(__name__)

BATCH_BINDING = "__surveysyncBatch"
INPUT_BINDING = "__surveysyncInput"
ATTACHED_BINDING = "__surveysyncAttached"


class LiveSurveyBinding:
    def __init__(
        self,
        page,
        session: SurveySession,
        on_question_changed: Optional[QuestionChangedCallback] = None,
        observer: Optional[ChangeObserver] = None,
    ):
        self.page = page
        self.session = session
        self.observer = observer or ChangeObserver(session, on_question_changed=on_question_changed)
        self._lock = asyncio.Lock()
        self._attached_event = asyncio.Event()
        self._exposed = False

    @property
    def region_id(self) -> str:
        return self.session.markers.region_id

    def _script_options(self) -> Dict[str, Any]:
        markers = self.session.markers
        return {
            "regionId": markers.region_id,
            "questionSelector": markers.question,
            "scaleListSelector": markers.scale_list,
            "selectionAttr": markers.rendered_selection_attr,
            "batchBinding": BATCH_BINDING,
            "inputBinding": INPUT_BINDING,
            "attachedBinding": ATTACHED_BINDING,
        }

    async def start(self) -> None:
        if not self._exposed:
            await self.page.expose_binding(BATCH_BINDING, self._on_batch)
            await self.page.expose_binding(INPUT_BINDING, self._on_input)
            await self.page.expose_binding(ATTACHED_BINDING, self._on_attached)
            self._exposed = True
        attached_now = await self.page.evaluate(INSTALL_OBSERVER_JS, self._script_options())
        if not attached_now:
            logger.info(f"Waiting for survey region #{self.region_id} to appear")

    async def stop(self) -> None:
        try:
            await self.page.evaluate(UNINSTALL_OBSERVER_JS)
        except PlaywrightError as e:
            logger.debug(f"Page-side observer already gone: {e}")
        self.observer.detach()
        self._attached_event.clear()

    async def wait_attached(self, timeout: Optional[float] = None) -> bool:
        """Wait until the region has appeared and the observer is attached."""
        try:
            await asyncio.wait_for(self._attached_event.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def __aenter__(self) -> "LiveSurveyBinding":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def _on_attached(self, source) -> None:
        async with self._lock:
            document = await snapshot_live_page(self.page, self.region_id)
            if self.observer.attach(document):
                self.session.extract_and_reconcile(document)
                self._attached_event.set()

    async def _on_batch(self, source, records: List[Dict[str, Any]]) -> Optional[int]:
        async with self._lock:
            if not self.observer.attached:
                return None
            batch = [ChangeRecord.from_dict(r) for r in records or [] if isinstance(r, dict)]
            if not self.observer.relevant_events(batch):
                return None
            document = await snapshot_live_page(self.page, self.region_id)
            return self.observer.handle_batch(batch, document)

    async def _on_input(self, source, payload: Dict[str, Any]) -> Optional[int]:
        async with self._lock:
            event = InputEvent.from_dict(payload or {})
            if not self.observer.attached or not event.targets_free_text(self.session.markers):
                return None
            document = await snapshot_live_page(self.page, self.region_id)
            return self.observer.handle_input(event, document)
