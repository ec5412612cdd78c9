"""
Survey Extraction Pipeline - classifier + extractors over every question

Usage:
    from surveysync_core.dom import SoupDocument
    from surveysync_core.pipeline import extract_survey

    questions = extract_survey(SoupDocument.from_html(html))
"""

import logging
from typing import List

from .dom.base import DocumentNode, SurveyDocument
from .markers import DEFAULT_MARKERS, SurveyMarkers
from .models import Question
from .parsing.classifier import classify_question
from .parsing.extractors import EXTRACTORS

logger = logging.getLogger(__name__)


def extract_question(container: DocumentNode, index: int, markers: SurveyMarkers = DEFAULT_MARKERS,
                     normalize_grid_rows: bool = False) -> Question:
    """Build the question record for one container (``index`` is 1-based)."""
    qtype = classify_question(container, markers)
    title_node = container.select_one(markers.title)
    title = title_node.text().strip() if title_node is not None else ""
    fields = EXTRACTORS[qtype](container, markers=markers, normalize_grid_rows=normalize_grid_rows)
    logger.debug(f"Question {index} classified as {qtype.value}")
    return Question(index=index, title=title, type=qtype, **fields)


def extract_survey(document: SurveyDocument, markers: SurveyMarkers = DEFAULT_MARKERS,
                   normalize_grid_rows: bool = False) -> List[Question]:
    """Extract every question in document order.

    A document without the survey region yields an empty list; that is a
    valid state, not an error.
    """
    region = document.region(markers.region_id)
    if region is None:
        logger.info(f"Survey region #{markers.region_id} not found; snapshot is empty")
        return []

    questions = [
        extract_question(container, i, markers, normalize_grid_rows)
        for i, container in enumerate(region.select(markers.question), start=1)
    ]
    logger.info(f"Extracted {len(questions)} questions")
    return questions
