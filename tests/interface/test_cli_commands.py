"""Tests for CLI commands: help, add, import, session, answer, check, preview, suspend, stats, config."""

import json
import logging

import pytest
from typer.testing import CliRunner

from lexis.interface.cli import app

runner = CliRunner()


@pytest.fixture
def store(mock_home, tmp_path):
    return tmp_path / "reviews.yaml"


def invoke(store, *args):
    return runner.invoke(app, ["--store", str(store), "--user", "tester", *args])


def added_id(result) -> str:
    return result.stdout.split()[0]


# --- Help ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "lexis: spaced-repetition vocabulary reviews" in result.stdout
    assert "session" in result.stdout
    assert "answer" in result.stdout


# --- Vocabulary ---


def test_add_and_queue(store):
    result = invoke(store, "add", "lucid", "clear and easy to understand")
    assert result.exit_code == 0
    assert "lucid" in result.stdout
    assert "new" in result.stdout
    assert store.exists()

    result = invoke(store, "queue")
    assert result.exit_code == 0
    assert "lucid" in result.stdout


def test_import(store, tmp_path):
    vocab = tmp_path / "vocab.yaml"
    vocab.write_text(
        "- term: lucid\n  definition: clear\n"
        "- term: terse\n  definition: brief\n  category: adjective\n"
        "- term: Lucid\n  definition: duplicate\n"
        "- not a mapping\n"
    )

    result = invoke(store, "import", str(vocab))
    assert result.exit_code == 0
    assert "Imported 2 new terms" in result.stdout


def test_import_skips_malformed_rows_and_normalizes_dates(store, tmp_path):
    vocab = tmp_path / "vocab.yaml"
    vocab.write_text(
        "- term: 123\n  definition: a number\n"
        "- term: lucid\n  definition: clear\n  created_at: 2026-01-05 10:30:00\n"
        "- term: terse\n  definition: brief\n  created_at: 2026-02-01\n"
    )

    result = invoke(store, "import", str(vocab))
    assert result.exit_code == 0
    assert "Imported 2 new terms" in result.stdout

    result = invoke(store, "queue")
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert "lucid" in lines[0] and "due 2026-01-05" in lines[0]
    assert "terse" in lines[1]


def test_import_rejects_bad_date(store, tmp_path):
    vocab = tmp_path / "vocab.yaml"
    vocab.write_text("- term: lucid\n  definition: clear\n  created_at: someday\n")

    result = invoke(store, "import", str(vocab))
    assert result.exit_code == 1


def test_import_rejects_non_list(store, tmp_path):
    vocab = tmp_path / "vocab.yaml"
    vocab.write_text("term: lucid\n")

    result = invoke(store, "import", str(vocab))
    assert result.exit_code == 1


# --- Review ---


def test_session_lists_cards(store):
    invoke(store, "add", "lucid", "clear")
    invoke(store, "add", "terse", "brief")

    result = invoke(store, "session", "--size", "1")
    assert result.exit_code == 0
    assert "Session: 1 cards" in result.stdout


def test_session_without_cards(store):
    result = invoke(store, "session")
    assert result.exit_code == 0
    assert "No cards available" in result.stdout


def test_session_rejects_zero_size(store):
    result = invoke(store, "session", "--size", "0")
    assert result.exit_code == 1


def test_answer_preview_and_suspend(store):
    record_id = added_id(invoke(store, "add", "lucid", "clear"))

    result = invoke(store, "preview", record_id)
    assert result.exit_code == 0
    assert "again  1 day" in result.stdout

    result = invoke(store, "answer", record_id, "good")
    assert result.exit_code == 0
    assert "1d" in result.stdout

    result = invoke(store, "suspend", record_id)
    assert result.exit_code == 0
    assert "[suspended]" in result.stdout

    result = invoke(store, "suspend", record_id, "--undo")
    assert "[suspended]" not in result.stdout


def test_answer_unknown_record(store):
    result = invoke(store, "answer", "rev_missing", "good")
    assert result.exit_code == 1


def test_answer_invalid_grade(store):
    record_id = added_id(invoke(store, "add", "lucid", "clear"))
    result = invoke(store, "answer", record_id, "perfect")
    assert result.exit_code == 1


def test_stats_json(store):
    invoke(store, "add", "lucid", "clear")

    result = invoke(store, "stats", "--json")
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["total_words"] == 1
    assert data["new_words"] == 1
    assert data["mastery_percentage"] == 0.0


# --- Config ---


def test_config_show(store):
    result = invoke(store, "config", "show")
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["user_id"] == "tester"
    assert data["store_path"] == str(store.resolve())


def test_check_typed_answer(store):
    record_id = added_id(invoke(store, "add", "carry away", "to be overwhelmed"))

    result = invoke(store, "check", record_id, "carried away")
    assert result.exit_code == 0
    assert "Correct: carry away" in result.stdout

    result = invoke(store, "check", record_id, "sleep")
    assert "Incorrect" in result.stdout


# --- Logging ---


@pytest.mark.parametrize(
    "flags, level",
    [([], logging.WARNING), (["-v"], logging.INFO), (["-vv"], logging.DEBUG)],
)
def test_verbosity_flags(store, flags, level):
    result = runner.invoke(app, [*flags, "--store", str(store), "queue"])
    assert result.exit_code == 0
    assert logging.getLogger("lexis").level == level
    logging.getLogger("lexis").setLevel(logging.WARNING)
