"""
Archetype Extractors - turn a classified container into question fields

Each extractor is a pure function ``(container, markers) -> dict`` whose
keys are ``Question`` field names. Missing sub-elements yield empty
strings and empty lists rather than errors.
"""

from typing import Any, Callable, Dict, List

from ..dom.base import DocumentNode
from ..markers import DEFAULT_MARKERS, SurveyMarkers
from ..models import MatrixRow, Option, QuestionType, ScaleOption
from ..probability import allocate_dropdown, allocate_grid_row, allocate_independent

Fields = Dict[str, Any]


def _text(node) -> str:
    if node is None:
        return ""
    text = node.text() or ""
    return text.strip()


def _choice_options(container: DocumentNode, markers: SurveyMarkers, role: str, input_type: str) -> List[Option]:
    options: List[Option] = []
    for item in container.select(markers.option_items):
        control = item.select_one(f'input[type="{input_type}"]')
        aux_inputs = item.select(markers.aux_input)
        options.append(Option(
            value=control.value() if control is not None else "",
            text=_text(item.select_one("label")),
            is_selected=item.has(markers.checked_selector(role)),
            has_auxiliary_input=len(aux_inputs) > 0,
            auxiliary_inputs=[node.value() for node in aux_inputs],
        ))
    return allocate_independent(options)


def extract_single_choice(container: DocumentNode, markers: SurveyMarkers = DEFAULT_MARKERS, **_) -> Fields:
    return {"options": _choice_options(container, markers, markers.radio_role, "radio")}


def extract_multi_choice(container: DocumentNode, markers: SurveyMarkers = DEFAULT_MARKERS, **_) -> Fields:
    return {"options": _choice_options(container, markers, markers.checkbox_role, "checkbox")}


def _grid_rows(table: DocumentNode, markers: SurveyMarkers) -> List[DocumentNode]:
    rows = table.select(markers.grid_row)
    if rows:
        return rows
    # html.parser does not synthesize <tbody>; fall back to rows outside <thead>
    header_rows = table.select("thead tr")
    return [tr for tr in table.select("tr") if not any(tr.same_node(h) for h in header_rows)]


def _extract_grid(container: DocumentNode, markers: SurveyMarkers, role: str, normalize: bool) -> Fields:
    table = container.select_one(markers.grid)
    if table is None:
        return {"headers": [], "rows": []}

    headers = [_text(td) for td in table.select(markers.grid_header_cell)]
    rows: List[MatrixRow] = []
    for tr in _grid_rows(table, markers):
        options: List[Option] = []
        for td in tr.select(markers.grid_cell):
            control = td.select_one("input")
            value = control.value() if control is not None else ""
            options.append(Option(
                value=value,
                text=value,
                is_selected=td.has(markers.checked_selector(role)),
            ))
        rows.append(MatrixRow(
            title=_text(tr.select_one(markers.grid_row_title)),
            options=allocate_grid_row(options, normalize=normalize),
        ))
    return {"headers": headers, "rows": rows}


def extract_grid_single(container: DocumentNode, markers: SurveyMarkers = DEFAULT_MARKERS,
                        normalize_grid_rows: bool = False, **_) -> Fields:
    return _extract_grid(container, markers, markers.radio_role, normalize_grid_rows)


def extract_grid_multi(container: DocumentNode, markers: SurveyMarkers = DEFAULT_MARKERS,
                       normalize_grid_rows: bool = False, **_) -> Fields:
    return _extract_grid(container, markers, markers.checkbox_role, normalize_grid_rows)


def extract_free_text(container: DocumentNode, markers: SurveyMarkers = DEFAULT_MARKERS, **_) -> Fields:
    control = container.select_one(markers.free_text)
    value = control.value() if control is not None else ""
    return {
        "free_text_value": value,
        "free_text_id": (control.attr("id", "") or "") if control is not None else "",
        "free_text_inputs": [{"value": value}],
    }


def extract_dropdown(container: DocumentNode, markers: SurveyMarkers = DEFAULT_MARKERS, **_) -> Fields:
    control = container.select_one(markers.dropdown)
    if control is None:
        return {"dropdown_options": [], "selected_dropdown_value": ""}

    nodes = control.select("option")
    chosen = next((i for i, node in enumerate(nodes) if node.is_selected()), 0)
    options = [
        Option(value=node.value(), text=_text(node), is_selected=(i == chosen))
        for i, node in enumerate(nodes)
    ]
    return {
        "dropdown_options": allocate_dropdown(options),
        "selected_dropdown_value": control.value(),
    }


def extract_scale(container: DocumentNode, markers: SurveyMarkers = DEFAULT_MARKERS, **_) -> Fields:
    items = container.select(markers.scale_items)
    if not items:
        return {"options": [], "min_label": "", "max_label": ""}

    min_label = _text(items[0].select_one(markers.scale_boundary_label))
    max_label = _text(items[-1].select_one(markers.scale_boundary_label))

    interior = items[1:-1]
    active = [i for i, li in enumerate(interior) if li.has_class_token(markers.scale_active_token)]
    chosen = active[-1] if active else -1

    options: List[ScaleOption] = []
    for i, li in enumerate(interior):
        try:
            value = int(li.attr("value", "0") or "0")
        except ValueError:
            value = 0
        options.append(ScaleOption(value=value, label=li.attr("title") or f"{i + 1}", is_selected=(i == chosen)))
    return {"options": options, "min_label": min_label, "max_label": max_label}


def extract_unrecognized(container: DocumentNode, markers: SurveyMarkers = DEFAULT_MARKERS, **_) -> Fields:
    return {"raw_content": container.inner_html()}


EXTRACTORS: Dict[QuestionType, Callable[..., Fields]] = {
    QuestionType.SINGLE_CHOICE: extract_single_choice,
    QuestionType.MULTI_CHOICE: extract_multi_choice,
    QuestionType.GRID_SINGLE: extract_grid_single,
    QuestionType.GRID_MULTI: extract_grid_multi,
    QuestionType.FREE_TEXT: extract_free_text,
    QuestionType.DROPDOWN: extract_dropdown,
    QuestionType.SCALE: extract_scale,
    QuestionType.UNRECOGNIZED: extract_unrecognized,
}
