"""Tests for SurveySession: pipeline entry points, mutators, persistence calls."""

from unittest.mock import MagicMock

import pytest

from surveysync_core.dom import SoupDocument
from surveysync_core.models import MatrixRow, Option, Question, QuestionType, ScaleOption
from surveysync_core.session import SurveySession, survey_id_from_url


@pytest.fixture
def persist():
    return MagicMock()


@pytest.fixture
def session(persist, mixed_survey_html):
    s = SurveySession("abc123", persist=persist)
    s.extract_and_reconcile(SoupDocument.from_html(mixed_survey_html))
    persist.reset_mock()
    return s


class TestSurveyIdFromUrl:
    @pytest.mark.parametrize("url,expected", [
        ("https://www.wjx.cn/vj/abc123.aspx", "abc123"),
        ("https://www.wjx.cn/vj/Xy9Z.aspx?from=share#top", "Xy9Z"),
        ("https://www.wjx.cn/jq/abc123.aspx", "default"),
        ("https://example.com/", "default"),
        ("", "default"),
        (None, "default"),
    ])
    def test_ids(self, url, expected):
        assert survey_id_from_url(url) == expected


class TestPipelineEntryPoints:
    def test_extract_and_reconcile_persists(self, mixed_survey_html):
        persist = MagicMock()
        s = SurveySession("abc123", persist=persist)
        questions = s.extract_and_reconcile(SoupDocument.from_html(mixed_survey_html))

        assert len(questions) == 7
        persist.assert_called_once()
        survey_id, records = persist.call_args[0]
        assert survey_id == "abc123"
        assert records == s.to_records()

    def test_extract_does_not_touch_snapshot(self, session, persist, survey_html):
        fresh = session.extract(survey_html.document(survey_html.free_text("Other")))
        assert len(fresh) == 1
        assert len(session.questions) == 7
        persist.assert_not_called()

    def test_reset_discards_customizations(self, session, persist, mixed_survey_html):
        session.questions[0].options[0].probability = 95
        session.reset(SoupDocument.from_html(mixed_survey_html))
        assert [o.probability for o in session.questions[0].options] == [34, 33, 33]
        persist.assert_called_once()

    def test_reconcile_keeps_customizations(self, session, mixed_survey_html):
        session.questions[0].options[0].probability = 95
        session.extract_and_reconcile(SoupDocument.from_html(mixed_survey_html))
        assert session.questions[0].options[0].probability == 95

    def test_missing_region_empties_snapshot(self, session):
        assert session.extract_and_reconcile(SoupDocument.empty()) == []

    def test_load_prefers_saved_records(self, session, mixed_survey_html):
        saved = session.to_records()
        saved[3]["freeTextValue"] = "from disk"

        persist = MagicMock()
        fresh_session = SurveySession("abc123", persist=persist)
        fresh_session.load(SoupDocument.from_html(mixed_survey_html), saved)

        assert fresh_session.questions[3].free_text_value == "from disk"
        persist.assert_not_called()

    def test_load_without_saved_records_extracts(self, mixed_survey_html):
        persist = MagicMock()
        s = SurveySession("abc123", persist=persist)
        s.load(SoupDocument.from_html(mixed_survey_html), None)
        assert len(s.questions) == 7
        persist.assert_called_once()

    def test_no_persist_callback(self, mixed_survey_html):
        s = SurveySession()
        s.extract_and_reconcile(SoupDocument.from_html(mixed_survey_html))
        assert s.survey_id == "default"
        assert len(s.questions) == 7


class TestMutators:
    def test_replace_question(self, session, persist):
        replacement = Question(index=4, title="Comments", type=QuestionType.FREE_TEXT, free_text_value="x")
        assert session.replace_question(4, replacement) is True
        assert session.get_question(4).free_text_value == "x"
        persist.assert_called_once()

    def test_replace_unknown_question(self, session, persist):
        assert session.replace_question(42, Question(index=42, title="", type=QuestionType.FREE_TEXT)) is False
        persist.assert_not_called()

    def test_update_options(self, session, persist):
        options = [Option("1", "Male", True, 70), Option("2", "Female", False, 20), Option("3", "Other", False, 10)]
        assert session.update_options(1, options) is True
        assert [o.probability for o in session.get_question(1).options] == [70, 20, 10]
        persist.assert_called_once_with("abc123", session.to_records())

    def test_update_scale_options(self, session, persist):
        options = [ScaleOption(value=i, label=str(i), is_selected=(i == 5)) for i in range(1, 6)]
        assert session.update_options(6, options) is True
        persist.assert_called_once()

    def test_update_options_rejects_other_types(self, session, persist):
        assert session.update_options(4, [Option()]) is False
        assert session.update_options(99, [Option()]) is False
        persist.assert_not_called()

    def test_update_rows(self, session, persist):
        rows = [MatrixRow("Food", [Option("1", "1", True, 100)]), MatrixRow("Staff", [])]
        assert session.update_rows(3, rows) is True
        assert session.get_question(3).rows[0].options[0].probability == 100
        persist.assert_called_once()

    def test_update_rows_rejects_choice(self, session, persist):
        assert session.update_rows(1, []) is False
        persist.assert_not_called()

    def test_set_free_text(self, session, persist):
        assert session.set_free_text(4, "Great food") is True
        question = session.get_question(4)
        assert question.free_text_value == "Great food"
        assert question.free_text_inputs == [{"value": "Great food"}]
        persist.assert_called_once()

    def test_set_free_text_rejects_choice(self, session, persist):
        assert session.set_free_text(1, "x") is False
        persist.assert_not_called()

    def test_set_dropdown_selection(self, session, persist):
        assert session.set_dropdown_selection(5, "1") is True
        question = session.get_question(5)
        assert question.selected_dropdown_value == "1"
        assert [o.is_selected for o in question.dropdown_options] == [False, True, False]
        assert [o.probability for o in question.dropdown_options] == [0, 100, 0]
        persist.assert_called_once()

    def test_set_dropdown_unknown_value(self, session, persist):
        assert session.set_dropdown_selection(5, "nope") is False
        assert session.get_question(5).selected_dropdown_value == "2"
        persist.assert_not_called()

    def test_set_dropdown_rejects_other_types(self, session, persist):
        assert session.set_dropdown_selection(4, "1") is False
        persist.assert_not_called()


class TestCompleteness:
    def test_unanswered_questions(self, session):
        # Gender has no selection, grid row "Staff" is empty
        assert session.has_unanswered_questions() is True
        assert session.unanswered_indices() == [1, 3]

    def test_all_answered(self, session):
        session.questions[0].options[0].is_selected = True
        session.questions[2].rows[1].options[0].is_selected = True
        assert session.has_unanswered_questions() is False
        assert session.unanswered_indices() == []

    def test_blank_free_text_is_unanswered(self, session):
        session.set_free_text(4, "   ")
        assert 4 in session.unanswered_indices()
