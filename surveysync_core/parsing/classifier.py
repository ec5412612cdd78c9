"""Question Classifier - assign one archetype to a question container."""

from ..dom.base import DocumentNode
from ..markers import DEFAULT_MARKERS, SurveyMarkers
from ..models import QuestionType


def classify_question(container: DocumentNode, markers: SurveyMarkers = DEFAULT_MARKERS) -> QuestionType:
    """Classify one question container.

    Markup for the archetypes overlaps (a grid cell holds radio controls,
    a free-text question may sit inside a table), so the checks run in a
    fixed priority order and the first match wins.
    """
    if container.has(markers.option_list):
        checkbox_items = f"{markers.option_items} {markers.role_selector(markers.checkbox_role)}"
        if container.has(checkbox_items):
            return QuestionType.MULTI_CHOICE
        return QuestionType.SINGLE_CHOICE

    if container.has(markers.grid):
        if container.has(f"{markers.grid} {markers.role_selector(markers.checkbox_role)}"):
            return QuestionType.GRID_MULTI
        return QuestionType.GRID_SINGLE

    if container.has(markers.free_text):
        return QuestionType.FREE_TEXT

    if container.has(markers.dropdown):
        return QuestionType.DROPDOWN

    if container.has(markers.scale_list):
        return QuestionType.SCALE

    return QuestionType.UNRECOGNIZED
