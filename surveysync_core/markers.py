"""
Survey Markers - Centralized marker definitions for survey markup

Every structural hint the classifier, the extractors and the change
observer rely on lives here, so a different survey template only needs a
different ``SurveyMarkers`` instance (or a YAML file with overrides).

Usage:
    from surveysync_core.markers import DEFAULT_MARKERS, SurveyMarkers

    markers = SurveyMarkers.from_yaml("markers/custom.yaml")
    markers.region_selector   # '#ctl00_ContentPlaceHolder1_JQ1_surveyContent'
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

import yaml

from .errors import MarkersFileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SurveyMarkers:
    """CSS selectors and class tokens describing one survey template."""

    # Region and question containers
    region_id: str = "ctl00_ContentPlaceHolder1_JQ1_surveyContent"
    question: str = ".div_question"
    title: str = ".div_title_question"

    # Radio / checkbox option lists
    option_list: str = ".ulradiocheck"
    option_item: str = "li"
    radio_role: str = "jqRadio"
    checkbox_role: str = "jqCheckbox"
    checked_state: str = "jqChecked"
    aux_input: str = 'input[type="text"]'

    # Grids
    grid: str = "table"
    grid_header_cell: str = "thead td"
    grid_row: str = "tbody tr"
    grid_row_title: str = "th"
    grid_cell: str = "td"

    # Free text and dropdowns
    free_text: str = "textarea"
    dropdown: str = "select"
    rendered_selection_label: str = "select2-selection__rendered"
    rendered_selection_attr: str = "title"

    # Scales
    scale_list: str = ".div_table_radio_question"
    scale_item: str = "li"
    scale_boundary_label: str = "b"
    scale_active_token: str = "on"

    @property
    def region_selector(self) -> str:
        return f"#{self.region_id}"

    @property
    def option_items(self) -> str:
        return f"{self.option_list} {self.option_item}"

    @property
    def scale_items(self) -> str:
        return f"{self.scale_list} {self.scale_item}"

    def role_selector(self, role: str) -> str:
        return f".{role}"

    def checked_selector(self, role: str) -> str:
        """Compound marker: the role class and the checked-state class on one node."""
        return f".{role}.{self.checked_state}"

    def with_overrides(self, overrides: Dict[str, Any]) -> "SurveyMarkers":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            logger.warning(f"Ignoring unknown marker keys: {', '.join(unknown)}")
        return replace(self, **{k: str(v) for k, v in overrides.items() if k in known})

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "SurveyMarkers":
        """Load a markers profile; keys missing from the file keep their defaults."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise MarkersFileError(f"Cannot read markers file {path}: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MarkersFileError(f"Markers file {path} must contain a mapping")
        return cls().with_overrides(data)


DEFAULT_MARKERS = SurveyMarkers()


def load_markers(path: Optional[str] = None) -> SurveyMarkers:
    """Markers from ``path`` (or the configured markers file), else the defaults."""
    if path is None:
        from .config import config
        path = config.markers_file
    if not path:
        return DEFAULT_MARKERS
    return SurveyMarkers.from_yaml(path)
