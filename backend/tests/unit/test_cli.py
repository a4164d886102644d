"""
Unit tests for the command-line runner's argument parsing.

The script lives outside the package, so it is loaded from its path.
"""

import importlib.util
from pathlib import Path

import pytest

from pdf_questions.config import settings

SCRIPT_PATH = Path(__file__).resolve().parents[3] / "scripts" / "run_pipeline.py"


@pytest.fixture(scope="module")
def run_pipeline():
    """Load scripts/run_pipeline.py as a module."""
    spec = importlib.util.spec_from_file_location("run_pipeline", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestCreateParser:
    """Tests for create_parser."""

    def test_description_names_application(self, run_pipeline):
        parser = run_pipeline.create_parser()

        assert parser.description.startswith(settings.APP_NAME)

    def test_pdf_command(self, run_pipeline):
        args = run_pipeline.create_parser().parse_args(
            ["pdf", "https://example.com/a.pdf", "-n", "3", "--json"]
        )

        assert args.command == "pdf"
        assert args.url == "https://example.com/a.pdf"
        assert args.max_questions == 3
        assert args.json is True

    def test_questions_command_requires_source(self, run_pipeline):
        """Either --text or --text-file must be given."""
        with pytest.raises(SystemExit):
            run_pipeline.create_parser().parse_args(["questions"])

    def test_debug_flag(self, run_pipeline):
        args = run_pipeline.create_parser().parse_args(
            ["--debug", "summarize", "https://example.com/a.pdf"]
        )

        assert args.debug is True
        assert args.command == "summarize"
