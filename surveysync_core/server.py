#!/usr/bin/env python3
"""
HTTP boundary for the overlay UI.

The UI posts the current survey HTML; snapshots are kept in the
SnapshotStore keyed by survey id.
"""

import logging
from functools import partial
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request
from flask_cors import CORS

from .config import config
from .diagnostics import get_logger
from .dom.soup import SoupDocument
from .markers import SurveyMarkers, load_markers
from .models import MatrixRow, Option, Question, QuestionType, ScaleOption
from .persistence import SnapshotStore
from .session import SurveySession, survey_id_from_url

logger = get_logger(__name__)

VERSION = "0.1.0"


def _error(message: str, status: int) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": message}), status


def _html_from(data: Dict[str, Any]) -> Optional[str]:
    html = data.get("html")
    return html if isinstance(html, str) else None


def create_app(store: Optional[SnapshotStore] = None, markers: Optional[SurveyMarkers] = None) -> Flask:
    app = Flask(__name__)
    CORS(app)
    store = store or SnapshotStore()
    markers = markers or load_markers()

    def open_session(survey_id: str) -> SurveySession:
        session = SurveySession(survey_id, persist=store.persist, markers=markers)
        saved = store.load(survey_id)
        if saved:
            session.load(SoupDocument.empty(), saved)
        return session

    @app.route('/health', methods=['GET'])
    def health_check():
        return jsonify({"status": "healthy", "version": VERSION, "region": markers.region_id})

    @app.route('/api/parse', methods=['POST'])
    def parse():
        data = request.get_json(silent=True) or {}
        html = _html_from(data)
        if html is None:
            return _error("Field 'html' is required", 400)
        session = SurveySession(survey_id_from_url(data.get('url')), markers=markers)
        questions = session.extract(SoupDocument.from_html(html))
        return jsonify({
            "ok": True,
            "surveyId": session.survey_id,
            "questions": [q.to_dict() for q in questions],
        })

    @app.route('/api/surveys/<survey_id>', methods=['GET'])
    def get_survey(survey_id: str):
        records = store.load(survey_id)
        if records is None:
            return _error(f"Unknown survey {survey_id}", 404)
        return jsonify({"ok": True, "surveyId": survey_id, "questions": records})

    @app.route('/api/surveys/<survey_id>/sync', methods=['POST'])
    def sync_survey(survey_id: str):
        data = request.get_json(silent=True) or {}
        html = _html_from(data)
        if html is None:
            return _error("Field 'html' is required", 400)
        touched = data.get('touched') or []
        if not isinstance(touched, list) or not all(isinstance(i, int) for i in touched):
            return _error("Field 'touched' must be a list of question indices", 400)
        session = open_session(survey_id)
        session.extract_and_reconcile(SoupDocument.from_html(html), touched=touched)
        logger.info(f"Synced survey {survey_id}: {len(session.questions)} questions, touched={sorted(touched)}")
        return jsonify({"ok": True, "surveyId": survey_id, "questions": session.to_records()})

    @app.route('/api/surveys/<survey_id>/reset', methods=['POST'])
    def reset_survey(survey_id: str):
        data = request.get_json(silent=True) or {}
        html = _html_from(data)
        if html is None:
            return _error("Field 'html' is required", 400)
        session = SurveySession(survey_id, persist=store.persist, markers=markers)
        session.reset(SoupDocument.from_html(html))
        return jsonify({"ok": True, "surveyId": survey_id, "questions": session.to_records()})

    @app.route('/api/surveys/<survey_id>/questions/<int:index>', methods=['PATCH'])
    def patch_question(survey_id: str, index: int):
        if store.load(survey_id) is None:
            return _error(f"Unknown survey {survey_id}", 404)
        data = request.get_json(silent=True) or {}
        session = open_session(survey_id)
        question = session.get_question(index)
        if question is None:
            return _error(f"Unknown question {index}", 404)

        try:
            if "question" in data and isinstance(data["question"], dict):
                replacement = Question.from_dict({**data["question"], "index": index})
                mutate = partial(session.replace_question, index, replacement)
            elif "options" in data and isinstance(data["options"], list):
                factory = ScaleOption.from_dict if question.type == QuestionType.SCALE else Option.from_dict
                options = [factory(o) for o in data["options"]]
                mutate = partial(session.update_options, index, options)
            elif "rows" in data and isinstance(data["rows"], list):
                rows = [MatrixRow.from_dict(r) for r in data["rows"]]
                mutate = partial(session.update_rows, index, rows)
            elif "freeTextValue" in data:
                mutate = partial(session.set_free_text, index, str(data["freeTextValue"]))
            elif "selectedDropdownValue" in data:
                mutate = partial(session.set_dropdown_selection, index, str(data["selectedDropdownValue"]))
            else:
                return _error("No supported mutation in request body", 400)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Malformed mutation for question {index} of survey {survey_id}: {e}")
            return _error("Malformed mutation payload", 400)

        applied = mutate()
        if not applied:
            logger.warning(f"Rejected mutation for question {index} of survey {survey_id}")
            return _error(f"Mutation does not apply to a {question.type.value} question", 400)
        return jsonify({"ok": True, "question": session.get_question(index).to_dict()})

    return app


def run_server(port: Optional[int] = None) -> None:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    app = create_app()
    app.run(host='0.0.0.0', port=port or config.api_port)
