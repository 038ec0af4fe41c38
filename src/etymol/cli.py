# src/etymol/cli.py
"""
Etymol Command Line Interface (CLI).

This module is the terminal shell around the lookup pipeline, built with
`typer` and `rich`. It plays the part of the editor modal: it shows a loading
spinner, then either the per-source etymology blocks, the structured English
entries, a "not found" notice, or a connectivity failure.

Usage
-----
    # Look up a word (language prompted, defaulting to the saved preference)
    $ etymol lookup casa

    # Explicit language, machine-readable output
    $ etymol lookup étymologie --lang fr --json

    # Read the selection from stdin
    $ echo "hello" | etymol lookup --lang en

    # Persist the default language
    $ etymol config set-language fr
"""

from __future__ import annotations

import json
import sys
import traceback
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt
from rich.table import Table

from etymol.core.contracts import EnglishEntry, LanguageCode
from etymol.core.preferences import load_preferences, save_preferences
from etymol.core.result import (
    EmptySelection,
    EntriesFound,
    Found,
    InvalidQuery,
    LookupFailed,
    LookupResult,
    NotFound,
)
from etymol.pipelines.lookup import LookupPipeline
from etymol.sources.registry import LANGUAGE_SOURCES, get_source
from etymol.text import ellipsis

load_dotenv()

app = typer.Typer(
    help="Etymol: look up word etymologies across dictionary sites.",
    rich_markup_mode="markdown",
)
config_app = typer.Typer(help="Show or change saved preferences.")
app.add_typer(config_app, name="config")

console = Console()

LANGUAGE_NAMES = {
    LanguageCode.ENGLISH: "English",
    LanguageCode.SPANISH: "Español",
    LanguageCode.FRENCH: "Français",
}


def build_pipeline() -> LookupPipeline:
    """Factory seam; tests patch this to inject a fake transport."""
    return LookupPipeline()


# --------------------------------------------------------------------------- #
# Helpers: Input
# --------------------------------------------------------------------------- #


def _read_selection(word: str | None) -> str | None:
    """Use the argument, else whatever was piped on stdin."""
    if word is not None:
        return word
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return None


def _parse_language(value: str) -> LanguageCode:
    try:
        return LanguageCode.parse(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _prompt_language(*, interactive: bool = True) -> LanguageCode:
    """Ask for the language, offering the saved preference as default.

    Without an interactive stdin (the selection was piped in, or input ran
    out) the saved preference is used as is.
    """
    default = load_preferences().default_language
    if not interactive:
        return default
    choices = [code.value for code in LanguageCode]
    try:
        answer = Prompt.ask(
            "Select language / Seleccione idioma",
            choices=choices,
            default=default.value,
            console=console,
        )
    except EOFError:
        console.print("")
        return default
    return LanguageCode(answer)


# --------------------------------------------------------------------------- #
# Helpers: Rendering
# --------------------------------------------------------------------------- #


def _render_found(result: Found) -> None:
    etymology = result.etymology
    console.rule(f"[bold]{escape(etymology.term)}[/bold]")
    for source_result in etymology.found:
        label = get_source(source_result.source).label
        console.print(
            Panel(escape(source_result.text or ""), title=escape(label), title_align="left")
        )
    missing = [get_source(r.source).label for r in etymology.results if not r.found]
    if missing:
        console.print(f"[dim]No text from: {escape(', '.join(missing))}[/dim]")


def render_entries(entries: tuple[EnglishEntry, ...] | list[EnglishEntry], term: str) -> None:
    """Print structured English entries: headword, origin, meanings."""
    console.rule(f"[bold]{escape(term)}[/bold]")
    for entry in entries:
        heading = f"[bold cyan]{escape(entry.word)}[/bold cyan]"
        if entry.phonetic:
            heading += f"  [dim]{escape(entry.phonetic)}[/dim]"
        console.print(heading)
        if entry.origin:
            console.print(Panel(escape(entry.origin), title="Origin", title_align="left"))
        for meaning in entry.meanings:
            console.print(f"[bold yellow]{escape(meaning.part_of_speech)}[/bold yellow]")
            for n, item in enumerate(meaning.definitions, start=1):
                console.print(f" {n}. {escape(item.definition)}")
                if item.example:
                    console.print(f"    [italic dim]{escape(item.example)}[/italic dim]")
        console.print("")


def _render(result: LookupResult) -> None:
    if isinstance(result, Found):
        _render_found(result)
    elif isinstance(result, EntriesFound):
        render_entries(result.entries, result.term)
    elif isinstance(result, NotFound):
        console.print(f'No etymology or definition found for "{escape(result.term)}".')
    elif isinstance(result, InvalidQuery):
        console.print(f"[bold yellow]Invalid selection:[/bold yellow] {escape(result.reason)}")
    elif isinstance(result, LookupFailed):
        console.print(f"[bold red]{escape(result.message)}[/bold red]")
    elif isinstance(result, EmptySelection):
        console.print("Select a word to look up.")


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def lookup(
    word: Annotated[
        str | None,
        typer.Argument(help="Word to look up. Read from stdin when omitted."),
    ] = None,
    lang: Annotated[
        str | None,
        typer.Option("--lang", "-l", help="Language code: en, es or fr."),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the raw result as JSON."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """
    Look up the etymology of a word.

    Spanish and French fan out to several dictionary sites at once; English
    queries a structured dictionary and prints its entries.
    """
    selection = _read_selection(word)
    if selection is None or not selection.strip():
        _render(EmptySelection())
        return

    if lang is not None:
        language = _parse_language(lang)
    else:
        # stdin already held the selection; there is nothing left to prompt from.
        language = _prompt_language(interactive=word is not None)
    pipeline = build_pipeline()

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(
                f'[cyan]Searching "{escape(ellipsis(selection.strip()))}"...', total=None
            )
            result = pipeline.lookup(selection, language)
    except Exception as e:
        console.print(f"\n[bold red]Lookup Error:[/bold red] {escape(str(e))}")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from e

    if as_json:
        console.print_json(json.dumps(result.to_dict(), ensure_ascii=False))
    else:
        _render(result)

    if result.is_failure():
        raise typer.Exit(code=1)


@app.command()  # type: ignore[misc]
def sources(
    lang: Annotated[
        str | None,
        typer.Option("--lang", "-l", help="Only list sources for this language."),
    ] = None,
) -> None:
    """List the sources consulted per language, in priority order."""
    languages = [_parse_language(lang)] if lang is not None else list(LanguageCode)

    table = Table(title="Etymology sources")
    table.add_column("Language")
    table.add_column("#", justify="right")
    table.add_column("Source")
    table.add_column("URL")
    for language in languages:
        for n, source_id in enumerate(LANGUAGE_SOURCES.get(language, ()), start=1):
            spec = get_source(source_id)
            table.add_row(LANGUAGE_NAMES[language], str(n), spec.label, spec.url_template)
    console.print(table)


@config_app.command("show")  # type: ignore[misc]
def config_show() -> None:
    """Print the saved preferences."""
    prefs = load_preferences()
    language = prefs.default_language
    console.print(f"Default language: [cyan]{language.value}[/cyan] ({LANGUAGE_NAMES[language]})")


@config_app.command("set-language")  # type: ignore[misc]
def config_set_language(
    language: Annotated[str, typer.Argument(help="Language code: en, es or fr.")],
) -> None:
    """Save the default language offered by `lookup`."""
    prefs = load_preferences()
    prefs.default_language = _parse_language(language)
    path = save_preferences(prefs)
    console.print(f"[green]Default language set to {prefs.default_language.value}[/green]")
    console.print(f"[dim]Saved to: {path}[/dim]")


if __name__ == "__main__":
    app()
