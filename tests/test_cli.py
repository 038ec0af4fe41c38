# tests/test_cli.py
"""
Tests for the Etymol command-line interface (CLI).

Scope
-----
These tests verify the interaction layer provided by Typer:
1.  **Command Registration**: `lookup`, `sources`, `config` and `--help`.
2.  **Rendering**: per-source blocks, English entries and the not-found notice.
3.  **Exit Codes**: 0 for every "the lookup ran" outcome, 1 for failures.
4.  **Preferences**: the language prompt defaults to the saved language.

`etymol.cli.build_pipeline` is patched to return a pipeline whose fetcher is
backed by `httpx.MockTransport`, so the real pipeline runs without network.
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from etymol.cli import app
from etymol.core.contracts import LanguageCode
from etymol.core.preferences import Preferences, load_preferences, save_preferences
from etymol.pipelines.lookup import LookupPipeline


@pytest.fixture  # type: ignore[misc]
def runner() -> CliRunner:
    """Fresh CliRunner per test to keep Click state isolated."""
    return CliRunner()


def _patched(fetcher: Any) -> Any:
    return patch("etymol.cli.build_pipeline", return_value=LookupPipeline(fetcher))


def test_cli_help_shows_usage(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, f"Help failed: {result.output}"
    assert "lookup" in result.output
    assert "config" in result.output


def test_lookup_renders_sources_in_order(runner: CliRunner, site_fetcher: Any) -> None:
    with _patched(site_fetcher):
        result = runner.invoke(app, ["lookup", "casa", "--lang", "es"])

    assert result.exit_code == 0, f"CLI failed:\n{result.output}"
    out = result.output
    assert "Diccionario panhispánico de dudas (RAE)" in out
    assert "Etimologías de Chile" in out
    assert out.index("Diccionario panhispánico") < out.index("Definiciones (DLE, RAE)")
    assert "Edificio para habitar." in out


def test_lookup_english_renders_entries(runner: CliRunner, site_fetcher: Any) -> None:
    with _patched(site_fetcher):
        result = runner.invoke(app, ["lookup", "hello", "-l", "en"])

    assert result.exit_code == 0, result.output
    assert "exclamation" in result.output
    assert "used as a greeting." in result.output
    assert "Origin" in result.output


def test_lookup_not_found_message(runner: CliRunner, fetcher_for: Any) -> None:
    import httpx

    fetcher = fetcher_for(lambda request: httpx.Response(404, text="no"))
    with _patched(fetcher):
        result = runner.invoke(app, ["lookup", "zzzz", "--lang", "fr"])

    assert result.exit_code == 0
    assert 'No etymology or definition found for "zzzz".' in result.output


def test_lookup_failed_exits_1(
    runner: CliRunner, fetcher_for: Any, unreachable_handler: Any
) -> None:
    with _patched(fetcher_for(unreachable_handler)):
        result = runner.invoke(app, ["lookup", "casa", "--lang", "es"])

    assert result.exit_code == 1, result.output
    assert "Are you connected to the internet?" in result.output


def test_lookup_json_output(runner: CliRunner, site_fetcher: Any) -> None:
    with _patched(site_fetcher):
        result = runner.invoke(app, ["lookup", "case", "--lang", "fr", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["kind"] == "found"
    assert payload["term"] == "case"
    assert [r["source"] for r in payload["results"]] == ["wiktionnaire", "cnrtl"]


def test_lookup_reads_stdin(runner: CliRunner, site_fetcher: Any) -> None:
    with _patched(site_fetcher):
        result = runner.invoke(app, ["lookup", "--lang", "fr", "--json"], input="Case\n")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["term"] == "case"


def test_lookup_empty_selection(runner: CliRunner) -> None:
    with patch("etymol.cli.build_pipeline") as build:
        result = runner.invoke(app, ["lookup", "--lang", "es"], input="   ")

    assert result.exit_code == 0
    assert "Select a word to look up." in result.output
    build.assert_not_called()


def test_lookup_rejects_unknown_language(runner: CliRunner) -> None:
    result = runner.invoke(app, ["lookup", "casa", "--lang", "de"])
    assert result.exit_code == 2
    assert "Unknown language" in result.output


def test_lookup_prompts_for_language(runner: CliRunner, site_fetcher: Any) -> None:
    with _patched(site_fetcher):
        result = runner.invoke(app, ["lookup", "case"], input="fr\n")

    assert result.exit_code == 0, result.output
    assert "Select language / Seleccione idioma" in result.output
    assert "Wiktionnaire" in result.output


def test_prompt_defaults_to_saved_language(runner: CliRunner, site_fetcher: Any) -> None:
    save_preferences(Preferences(default_language=LanguageCode.ENGLISH))
    with _patched(site_fetcher):
        result = runner.invoke(app, ["lookup", "hello"], input="\n")

    assert result.exit_code == 0, result.output
    assert "(en)" in result.output
    assert "used as a greeting." in result.output


def test_lookup_handles_pipeline_crash(runner: CliRunner) -> None:
    """Exceptions escaping the pipeline are reported with exit code 1."""
    with patch("etymol.cli.build_pipeline") as build:
        build.return_value.lookup.side_effect = RuntimeError("event loop exploded")
        result = runner.invoke(app, ["lookup", "casa", "--lang", "es"])

    assert result.exit_code == 1, result.output
    assert "Lookup Error" in result.output
    assert "event loop exploded" in result.output


def test_sources_lists_priority(runner: CliRunner) -> None:
    result = runner.invoke(app, ["sources", "--lang", "fr"])

    assert result.exit_code == 0, result.output
    assert "Wiktionnaire" in result.output
    assert "CNRTL" in result.output
    assert "Etimologías de Chile" not in result.output


def test_config_set_language_persists(runner: CliRunner) -> None:
    result = runner.invoke(app, ["config", "set-language", "FR"])

    assert result.exit_code == 0, result.output
    assert "Default language set to fr" in result.output
    assert load_preferences().default_language is LanguageCode.FRENCH

    shown = runner.invoke(app, ["config", "show"])
    assert "Default language: fr" in shown.output


def test_config_show_defaults_to_spanish(runner: CliRunner) -> None:
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert "Default language: es" in result.output


def test_piped_selection_uses_saved_language_without_prompt(
    runner: CliRunner, site_fetcher: Any
) -> None:
    """stdin carried the word, so the saved default is used instead of prompting."""
    save_preferences(Preferences(default_language=LanguageCode.FRENCH))
    with _patched(site_fetcher):
        result = runner.invoke(app, ["lookup"], input="case\n")

    assert result.exit_code == 0, result.output
    assert "Select language" not in result.output
    assert "Wiktionnaire" in result.output


def test_prompt_without_input_uses_saved_language(runner: CliRunner, site_fetcher: Any) -> None:
    """Running out of input at the prompt falls back to the saved default."""
    with _patched(site_fetcher):
        result = runner.invoke(app, ["lookup", "casa"], input="")

    assert result.exit_code == 0, result.output
    assert "Traceback" not in result.output
    assert "Etimologías de Chile" in result.output
