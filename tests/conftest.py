"""
Shared fixtures: synthetic survey pages in the wjx.cn markup shape.
"""

import pytest

from surveysync_core.dom import SoupDocument

REGION_ID = "ctl00_ContentPlaceHolder1_JQ1_surveyContent"


class SurveyHTML:
    """Builders for question containers and whole pages."""

    @staticmethod
    def choice(title, options, selected=(), multi=False, aux=None):
        role = "jqCheckbox" if multi else "jqRadio"
        input_type = "checkbox" if multi else "radio"
        aux = aux or {}
        items = []
        for i, text in enumerate(options):
            state = f"{role} jqChecked" if i in selected else role
            extra = "".join(f'<input type="text" value="{v}"/>' for v in aux.get(i, []))
            items.append(
                f'<li><a class="{state}"></a><input type="{input_type}" value="{i + 1}"/>'
                f'<label> {text} </label>{extra}</li>'
            )
        return (
            f'<div class="div_question"><div class="div_title_question">{title}</div>'
            f'<ul class="ulradiocheck">{"".join(items)}</ul></div>'
        )

    @staticmethod
    def grid(title, headers, rows, selected=None, multi=False):
        role = "jqCheckbox" if multi else "jqRadio"
        input_type = "checkbox" if multi else "radio"
        selected = selected or {}
        head = "".join(f"<td>{h}</td>" for h in headers)
        body = []
        for r, row_title in enumerate(rows):
            cells = []
            for c in range(len(headers)):
                state = f"{role} jqChecked" if c in selected.get(r, ()) else role
                cells.append(f'<td><a class="{state}"></a><input type="{input_type}" value="{c + 1}"/></td>')
            body.append(f"<tr><th>{row_title}</th>{''.join(cells)}</tr>")
        return (
            f'<div class="div_question"><div class="div_title_question">{title}</div>'
            f'<table><thead><tr><th></th>{head}</tr></thead><tbody>{"".join(body)}</tbody></table></div>'
        )

    @staticmethod
    def free_text(title, value="", control_id="q3"):
        return (
            f'<div class="div_question"><div class="div_title_question">{title}</div>'
            f'<textarea id="{control_id}">{value}</textarea></div>'
        )

    @staticmethod
    def dropdown(title, options, selected=None):
        nodes = "".join(
            f'<option value="{v}"{" selected" if v == selected else ""}>{t}</option>' for v, t in options
        )
        label = dict(options).get(selected, options[0][1] if options else "")
        return (
            f'<div class="div_question"><div class="div_title_question">{title}</div>'
            f'<select id="q4">{nodes}</select>'
            f'<span class="select2-selection__rendered" title="{label}">{label}</span></div>'
        )

    @staticmethod
    def scale(title, size=5, active=(), min_label="Unlikely", max_label="Very likely"):
        items = [f"<li><b>{min_label}</b></li>"]
        for i in range(size):
            cls = "rate on" if i in active else "rate"
            items.append(f'<li class="{cls}" value="{i + 1}" title="{i + 1} pts"></li>')
        items.append(f"<li><b>{max_label}</b></li>")
        return (
            f'<div class="div_question"><div class="div_title_question">{title}</div>'
            f'<div class="div_table_radio_question"><ul>{"".join(items)}</ul></div></div>'
        )

    @staticmethod
    def unrecognized(title):
        return (
            f'<div class="div_question"><div class="div_title_question">{title}</div>'
            f'<input type="file" name="upload"/></div>'
        )

    @staticmethod
    def page(*questions):
        return (
            f'<html><body><form><div id="{REGION_ID}">{"".join(questions)}</div></form></body></html>'
        )

    @classmethod
    def document(cls, *questions):
        return SoupDocument.from_html(cls.page(*questions))


@pytest.fixture
def survey_html():
    return SurveyHTML


@pytest.fixture
def mixed_survey_html():
    """One question of every archetype, in a fixed order."""
    return SurveyHTML.page(
        SurveyHTML.choice("Gender", ["Male", "Female", "Other"]),
        SurveyHTML.choice("Hobbies", ["Music", "Sport", "Travel", "Games"], selected={1, 3}, multi=True),
        SurveyHTML.grid("Rate services", ["Bad", "OK", "Good", "Great"], ["Food", "Staff"], selected={0: {1}}),
        SurveyHTML.free_text("Comments", "Nice place"),
        SurveyHTML.dropdown("City", [("", "Choose"), ("1", "Beijing"), ("2", "Shanghai")], selected="2"),
        SurveyHTML.scale("Recommend?", size=5, active={2}),
        SurveyHTML.unrecognized("Upload a photo"),
    )
