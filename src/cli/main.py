"""CLI entry point (Typer).

Commands:
- `preview`: render the sample form to an HTML file.
- `translate`: resolve one translation key.
- `doctor`: environment diagnostics.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.preview_exporter import export_preview_html
from cli import doctor
from cli.ui_components import build_translation_panel, print_banner
from core.config import AppSettings
from core.domain.errors import TranslationError
from core.domain.language import Language
from core.i18n import Translator

app = typer.Typer(no_args_is_help=True, help="GOV.UK Elements form builder tooling.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    _configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def preview(
    output: Path = typer.Option(Path("reports") / "preview.html", "--output", "-o", help="Destination HTML file."),
    language: Optional[Language] = typer.Option(None, "--language", "-l", help="Locale code (en/cy)."),
    invalid: bool = typer.Option(False, "--invalid", help="Validate the sample record so error markup is shown."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the banner."),
) -> None:
    """Render every GOV.UK helper with the sample record."""

    if not quiet:
        print_banner(_console)
    try:
        path = export_preview_html(output_path=output, language=language, invalid=invalid)
    except TranslationError as exc:
        _console.print(f"[red]Translation error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    _console.print(f"[green]Preview written to:[/green] {path}")


@app.command()
def translate(
    key: str = typer.Argument(..., help="Dot-separated key, e.g. helpers.label.person.name"),
    scope: Optional[str] = typer.Option(None, "--scope", "-s", help="Scope prepended to the key."),
    language: Optional[Language] = typer.Option(None, "--language", "-l", help="Locale code (en/cy)."),
    locale_path: List[Path] = typer.Option([], "--locale-path", help="Extra YAML file or directory."),
) -> None:
    """Resolve a translation key with the configured load path."""

    try:
        translator = Translator.from_settings(AppSettings(), load_path=locale_path)
    except TranslationError as exc:
        _console.print(f"[red]Translation error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    locale = language.value if language else translator.locale
    value = translator.translate(key, scope=scope, locale=locale)
    full_key = f"{scope}.{key}" if scope else key
    if value is None:
        _console.print(f"[yellow]Missing translation:[/yellow] {escape(f'{full_key} [{locale}]')}")
        raise typer.Exit(code=1)
    _console.print(build_translation_panel(full_key, value, locale))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
