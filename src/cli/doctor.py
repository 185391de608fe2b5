"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.preview_exporter import render_preview_html
from cli.ui_components import build_locales_table
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import TranslationError
from core.domain.language import Language
from core.i18n import Translator

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_translations(settings: AppSettings) -> tuple[Translator | None, str]:
    try:
        translator = Translator.from_settings(settings)
    except (TranslationError, OSError) as exc:
        return None, str(exc)
    return translator, f"{len(translator.loaded_files)} file(s)"


def _check_preview(settings: AppSettings) -> tuple[bool, str]:
    """Render the sample form with errors to detect template or locale issues."""

    try:
        html = render_preview_html(invalid=True, settings=settings)
    except Exception as exc:
        return False, str(exc)
    if 'class="form-group error"' not in html:
        return False, "Preview rendered without error markup"
    return True, f"{len(html)} bytes"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="govuk-forms Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Language", "OK", f"{settings.default_language.value} ({settings.default_language.label()})")
    table.add_row("Fallback", "OK", settings.fallback_language.value)
    missing = [str(p) for p in settings.locale_paths if not p.exists()]
    if missing:
        table.add_row("Locale paths", "FAIL", "Missing: " + ", ".join(missing))
    else:
        table.add_row("Locale paths", "OK", str(len(settings.locale_paths)) + " extra path(s)")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    translator, detail_i18n = _check_translations(settings)
    table.add_row("Translations", "OK" if translator else "FAIL", detail_i18n)

    ok_preview, detail_preview = _check_preview(settings)
    table.add_row("Preview render", "OK" if ok_preview else "FAIL", detail_preview)

    _console.print(table)
    if translator is not None:
        _console.print(build_locales_table(translator))

    if translator is None or not ok_preview:
        raise typer.Exit(code=1)


@app.command(name="set-language")
def set_language(
    language: Language = typer.Argument(..., help="Locale code (en/cy)."),
) -> None:
    """Store the default language in the user config .env."""

    env_path = write_user_env_vars({"GOVUK_FORMS_DEFAULT_LANGUAGE": language.value})
    _console.print(f"[green]Saved default language ({language.label()}) to:[/green] {env_path}")
