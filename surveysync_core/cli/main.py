#!/usr/bin/env python3
"""
surveysync CLI - extract, reconcile and watch surveys

Usage:
    surveysync parse <page.html> [--url URL] [--output FILE]
    surveysync sync <page.html> --url URL [--touched 3 --touched 5]
    surveysync plan <page.html> [--seed N]
    surveysync watch <url> [--headed]
    surveysync serve [--port PORT]
"""

import argparse
import asyncio
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any

from ..answer_plan import plan_answers
from ..config import config
from ..diagnostics import get_logger, set_level
from ..dom.soup import SoupDocument
from ..errors import SurveySyncError
from ..markers import load_markers
from ..persistence import SnapshotStore
from ..session import SurveySession, survey_id_from_url

logger = get_logger(__name__)

HTML_ARG_HELP = 'Path to a saved survey page'


def _configure_logging(args):
    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    if getattr(args, 'verbose', False):
        set_level("DEBUG")
    elif getattr(args, 'quiet', False):
        set_level("ERROR")


def _emit(payload: Any, output: str = None) -> None:
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if output:
        Path(output).write_text(text, encoding='utf-8')
        logger.info(f"Wrote {output}")
    else:
        print(text)


def _read_document(path: str) -> SoupDocument:
    return SoupDocument.from_html(Path(path).read_text(encoding='utf-8'))


def cmd_parse(args) -> int:
    session = SurveySession(survey_id_from_url(args.url), markers=load_markers(args.markers))
    questions = session.extract(_read_document(args.html))
    _emit([q.to_dict() for q in questions], args.output)
    return 0


def cmd_sync(args) -> int:
    store = SnapshotStore()
    session = SurveySession(survey_id_from_url(args.url), persist=store.persist, markers=load_markers(args.markers))
    document = _read_document(args.html)
    session.load(document, store.load(session.survey_id))
    session.extract_and_reconcile(document, touched=args.touched or [])
    logger.info(f"Survey {session.survey_id}: {len(session.questions)} questions, "
                f"unanswered: {session.unanswered_indices()}")
    _emit(session.to_records(), args.output)
    return 0


def cmd_plan(args) -> int:
    session = SurveySession(markers=load_markers(args.markers))
    questions = session.extract(_read_document(args.html))
    rng = random.Random(args.seed) if args.seed is not None else None
    _emit([p.to_dict() for p in plan_answers(questions, rng)])
    return 0


async def _watch(url: str, headed: bool, markers_path: str = None) -> None:
    from playwright.async_api import async_playwright
    from ..browser import LiveSurveyBinding

    store = SnapshotStore()
    session = SurveySession(survey_id_from_url(url), persist=store.persist, markers=load_markers(markers_path))
    saved = store.load(session.survey_id)
    if saved:
        session.load(SoupDocument.empty(), saved)

    def on_question_changed(index: int) -> None:
        logger.info(f"Question {index} changed")

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=not headed and config.headless)
        page = await browser.new_page()
        try:
            await page.goto(url)
            async with LiveSurveyBinding(page, session, on_question_changed) as binding:
                timeout = config.attach_timeout_ms / 1000 if config.attach_timeout_ms else None
                if not await binding.wait_attached(timeout):
                    logger.error("Survey region did not appear")
                    return
                logger.info(f"Watching {len(session.questions)} questions; Ctrl+C to stop")
                while not page.is_closed():
                    await asyncio.sleep(1)
        finally:
            await browser.close()


def cmd_watch(args) -> int:
    try:
        asyncio.run(_watch(args.url, args.headed, args.markers))
    except KeyboardInterrupt:
        logger.info("Stopped")
    return 0


def cmd_serve(args) -> int:
    from ..server import run_server
    run_server(args.port)
    return 0


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="surveysync - extract and synchronize survey answer state",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--verbose', action='store_true', help='Verbose output')
    parser.add_argument('--quiet', '-q', action='store_true', help='Quiet mode')
    parser.add_argument('--markers', help='YAML file with marker overrides')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    parse_parser = subparsers.add_parser('parse', help='Extract a survey snapshot')
    parse_parser.add_argument('html', help=HTML_ARG_HELP)
    parse_parser.add_argument('--url', help='Page address (used for the survey id)')
    parse_parser.add_argument('--output', '-o', help='Output file for the snapshot')
    parse_parser.set_defaults(func=cmd_parse)

    sync_parser = subparsers.add_parser('sync', help='Reconcile against the stored snapshot')
    sync_parser.add_argument('html', help=HTML_ARG_HELP)
    sync_parser.add_argument('--url', required=True, help='Page address (used for the survey id)')
    sync_parser.add_argument('--touched', type=int, action='append', help='Question changed by the user (1-based)')
    sync_parser.add_argument('--output', '-o', help='Output file for the snapshot')
    sync_parser.set_defaults(func=cmd_sync)

    plan_parser = subparsers.add_parser('plan', help='Draw an answer plan from the probabilities')
    plan_parser.add_argument('html', help=HTML_ARG_HELP)
    plan_parser.add_argument('--seed', type=int, help='Random seed')
    plan_parser.set_defaults(func=cmd_plan)

    watch_parser = subparsers.add_parser('watch', help='Keep a live page in sync')
    watch_parser.add_argument('url', help='Survey address')
    watch_parser.add_argument('--headed', action='store_true', help='Show the browser window')
    watch_parser.set_defaults(func=cmd_watch)

    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API')
    serve_parser.add_argument('--port', type=int, default=None, help='Port (default SURVEYSYNC_API_PORT)')
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    _configure_logging(args)
    try:
        return args.func(args)
    except SurveySyncError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
