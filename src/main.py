# src/main.py - v3
"""CLI entry point.

Usage:
    docquery ask --document policy.txt --questions questions.txt
    docquery ask --document policy.txt -q "What is the grace period?"
    cat policy.txt | docquery ask --document - --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from docquery.config.settings import ConfigurationError
from docquery.core.errors import NotConfigured, QueryError
from docquery.version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_CONFIGURED = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        _setup_logging(args.verbose)
    except (ConfigurationError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_NOT_CONFIGURED

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_ERROR

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except NotConfigured as exc:
        print(f"Configuration error: {exc.user_message}", file=sys.stderr)
        return EXIT_NOT_CONFIGURED
    except QueryError as exc:
        logger.debug("Query failed: %s", exc)
        print(f"Error: {exc.user_message}", file=sys.stderr)
        return EXIT_ERROR


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="docquery",
        description=f"docquery v{__version__} - answer questions from a document's text",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_ask = subparsers.add_parser(
        "ask", help="Answer questions grounded in a document's text",
    )
    p_ask.add_argument(
        "-d", "--document", required=True,
        help="Path to a text file with the document, or '-' for stdin",
    )
    p_ask.add_argument(
        "--questions", type=Path, default=None, dest="questions_file",
        help="File with one question per line",
    )
    p_ask.add_argument(
        "-q", "--question", action="append", default=[], dest="questions",
        help="Question to ask (repeatable)",
    )
    p_ask.add_argument(
        "--model", default=None,
        help="Override LLM_MODEL",
    )
    p_ask.add_argument(
        "--json", action="store_true", dest="as_json",
        help="Print results as JSON",
    )
    p_ask.set_defaults(func=_cmd_ask)

    return parser


async def _cmd_ask(args: argparse.Namespace) -> int:
    """Answer questions about one document."""
    from docquery.api.defaults import DEFAULT_QUESTIONS
    from docquery.api.facade import answer_questions, parse_questions
    from docquery.api.models import ConfigOverrides

    document_text = _read_document(args.document)
    if document_text is None:
        return EXIT_ERROR

    questions: list[str] = list(args.questions)
    if args.questions_file is not None:
        if not args.questions_file.exists():
            logger.error("File not found: %s", args.questions_file)
            return EXIT_ERROR
        try:
            questions_text = args.questions_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.error("Questions file is not valid UTF-8 text: %s", e)
            return EXIT_ERROR
        questions.extend(parse_questions(questions_text))
    if not questions:
        logger.info("No questions supplied; using the sample policy questions")
        questions = list(DEFAULT_QUESTIONS)

    overrides = ConfigOverrides(llm_model=args.model) if args.model else None
    report = await answer_questions(document_text, questions, overrides=overrides)

    if args.as_json:
        print(json.dumps(
            [r.model_dump() for r in report.results], indent=2, ensure_ascii=False,
        ))
    else:
        _print_results(report.results)
    return EXIT_OK


def _read_document(source: str) -> str | None:
    """Read document text from a path or stdin ('-')."""
    try:
        if source == "-":
            return sys.stdin.read()
        path = Path(source)
        if not path.exists():
            logger.error("File not found: %s", path)
            return None
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.error("Document is not valid UTF-8 text: %s", e)
        return None


def _print_results(results: list) -> None:
    """Print a human-readable list of question/answer pairs."""
    for result in results:
        print(f"\nQ{result.position + 1}. {result.question}")
        print(f"    {result.answer}")


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage from settings, -v forcing DEBUG."""
    from docquery.config.settings import Settings
    from docquery.logging.logger import setup_logging

    settings = Settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet noisy libraries
    for name in ("httpx", "httpcore", "grpc", "google"):
        logging.getLogger(name).setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
