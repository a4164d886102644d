#!/usr/bin/env python3
"""
PDF Question Pipeline Runner

Run the PDF question pipeline, or one of its halves, from the command line.

Setup:
    1. Create a .env file in the project root with your API keys:
       OPENAI_API_KEY=...
       ANTHROPIC_API_KEY=...

    2. Run a command:
       python scripts/run_pipeline.py <command> <args>

Usage:
    # Full pipeline: download, extract, summarize, generate questions
    python run_pipeline.py pdf https://example.com/paper.pdf
    python run_pipeline.py pdf https://example.com/paper.pdf --max-questions 5 --json

    # Download, extract and summarize only
    python run_pipeline.py summarize https://example.com/paper.pdf

    # Generate questions from text you already have
    python run_pipeline.py questions --text "Photosynthesis converts light..."
    python run_pipeline.py questions --text-file notes.txt --max-questions 3

Environment Variables (set in .env or environment):
    Required (depending on the configured models):
    - OPENAI_API_KEY: For the default summarization model
    - ANTHROPIC_API_KEY: For the default question model

    Optional (defaults in backend/pdf_questions/config/settings.py):
    - MODEL: Use one model for both stages
    - SUMMARIZATION_MODEL: Summarization model (default: openai/gpt-4.1)
    - QUESTION_MODEL: Question model (default: anthropic/claude-3-5-sonnet-20240620)
    - LLM_API_BASE: Custom completion endpoint
    - DEBUG: Enable verbose LiteLLM logging
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add backend to path for imports (must be before pdf_questions.* imports)
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from dotenv import load_dotenv

# Load environment variables from project root .env
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

# Package imports (after sys.path setup and env loading)
from pdf_questions.config import settings
from pdf_questions.exceptions import ServiceError
from pdf_questions.models import PipelineResult, SummaryResult
from pdf_questions.services.processing import (
    PipelineConfig,
    extract_and_summarize,
    generate_questions,
    generate_questions_from_pdf_url,
)

# Third-party loggers that are only useful with --debug
NOISY_LOGGERS = ("httpx", "httpcore", "LiteLLM")


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    if not debug:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def print_questions(result: PipelineResult, as_json: bool = False) -> None:
    """Print generated questions as a numbered list or JSON."""
    if as_json:
        data = {
            "success": result.success,
            "questions": result.questions,
            "usages": [u.to_dict() for u in result.usages],
        }
        print(json.dumps(data, indent=2, default=str))
        return

    lines = ["=" * 60, f"Questions ({result.question_count}):", "=" * 60]
    if not result.success:
        lines.append("Question generation failed; no questions were produced.")
    for i, question in enumerate(result.questions, 1):
        lines.append(f"  {i}. {question}")

    total_cost = sum(u.total_cost for u in result.usages)
    if total_cost:
        lines.append(f"\n💰 Estimated cost: ${total_cost:.4f}")

    print("\n".join(lines))


def print_summary(result: SummaryResult, as_json: bool = False) -> None:
    """Print a summary result with its document statistics."""
    if as_json:
        print(json.dumps(result.model_dump(), indent=2, default=str))
        return

    lines = [
        "=" * 60,
        f"File size: {result.file_size} bytes",
        f"Pages: {result.page_count}",
        f"Characters extracted: {result.character_count}",
        f"Summary length: {len(result.summary)} ({result.compression_ratio:.1%})",
        "=" * 60,
        "",
        result.summary,
    ]
    print("\n".join(lines))


async def run_pdf(args: argparse.Namespace) -> None:
    """Run the full pipeline on a PDF URL."""
    print(f"Processing PDF: {args.url}")
    result = await generate_questions_from_pdf_url(
        args.url,
        config=PipelineConfig(max_questions=args.max_questions),
    )
    print_questions(result, args.json)


async def run_summarize(args: argparse.Namespace) -> None:
    """Download, extract and summarize a PDF."""
    print(f"Summarizing PDF: {args.url}")
    result = await extract_and_summarize(args.url)
    print_summary(result, args.json)


async def run_questions(args: argparse.Namespace) -> None:
    """Generate questions from text given inline or in a file."""
    if args.text_file:
        text_path = Path(args.text_file).expanduser().resolve()
        if not text_path.exists():
            print(f"Error: File not found: {text_path}")
            sys.exit(1)
        text = text_path.read_text(encoding="utf-8")
    else:
        text = args.text

    result = await generate_questions(text, max_questions=args.max_questions)
    print_questions(result, args.json)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with a subcommand per entry point."""
    parser = argparse.ArgumentParser(
        description=f"{settings.APP_NAME}: generate study questions from PDF documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_json_arg(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--json",
            action="store_true",
            help="Print the result as JSON",
        )

    def add_max_questions_arg(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--max-questions",
            "-n",
            type=int,
            default=None,
            help="Maximum number of questions (default from settings)",
        )

    # Full pipeline
    pdf_parser = subparsers.add_parser(
        "pdf", help="Generate questions from a PDF URL"
    )
    pdf_parser.add_argument("url", help="URL of the PDF")
    add_max_questions_arg(pdf_parser)
    add_json_arg(pdf_parser)

    # Summary only
    summarize_parser = subparsers.add_parser(
        "summarize", help="Download, extract and summarize a PDF URL"
    )
    summarize_parser.add_argument("url", help="URL of the PDF")
    add_json_arg(summarize_parser)

    # Questions from text
    questions_parser = subparsers.add_parser(
        "questions", help="Generate questions from text"
    )
    source = questions_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Source text")
    source.add_argument("--text-file", help="Path to a UTF-8 text file")
    add_max_questions_arg(questions_parser)
    add_json_arg(questions_parser)

    return parser


async def main() -> None:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.debug)

    runners = {
        "pdf": run_pdf,
        "summarize": run_summarize,
        "questions": run_questions,
    }

    runner = runners.get(args.command)
    if not runner:
        print(f"Unknown command: {args.command}")
        sys.exit(1)

    try:
        await runner(args)
    except ServiceError as e:
        stage = e.stage.value if e.stage else "SETUP"
        print(f"Error [{stage}] {e.error_code}: {e.message}")
        hint = e.details.get("hint")
        if hint:
            print(hint)
        sys.exit(1)


async def run_with_cleanup() -> None:
    """Run main and close LiteLLM's shared async HTTP client."""
    try:
        await main()
    finally:
        import litellm

        if getattr(litellm, "aclient", None):
            await litellm.aclient.close()


if __name__ == "__main__":
    asyncio.run(run_with_cleanup())
