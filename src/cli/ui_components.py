"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.language import Language
from core.i18n import Translator


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("govuk-forms", style="bold cyan")
    subtitle = Text("GOV.UK Elements • Etiquetas • Pistas • Errores accesibles", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_locales_table(translator: Translator) -> Table:
    """Tabla con los idiomas cargados y cuántas claves tiene cada uno."""

    table = Table(title="Locales")
    table.add_column("Locale", style="cyan", no_wrap=True)
    table.add_column("Language", style="white")
    table.add_column("Keys", style="green", justify="right")
    table.add_column("Active", style="magenta")

    names = {language.value: language.label() for language in Language}
    for locale in translator.available_locales():
        table.add_row(
            locale,
            names.get(locale, "-"),
            str(len(translator.keys(locale))),
            "yes" if locale == translator.locale else "",
        )
    return table


def build_translation_panel(key: str, value: str, locale: str) -> Panel:
    """Panel con el texto resuelto de una clave."""

    body = Text()
    body.append(value + "\n\n")
    body.append(f"{key} [{locale}]", style="dim")
    return Panel(body, title=Text("Translation", style="bold yellow"), border_style="yellow")
