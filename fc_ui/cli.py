"""
Command-line preview for coach data tables.

Loads a row file (JSON or YAML), drives the table engine with the given
search/sort/page/selection gestures and prints the resulting page.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from fc_app.api import DataTableViewModel, build_data_table_viewmodel
from fc_common.api import FCError, configure_logging, format_error
from fc_ui.config import infer_table_config, load_rows, load_table_config
from fc_ui.presenters.data_table import build_data_table_model, selection_summary
from fc_ui.tui import theme
from fc_ui.tui.table_layout import build_rich_table

logger = logging.getLogger(__name__)

app = typer.Typer(help="Preview coach data tables in the terminal.", no_args_is_help=True)


@app.callback()
def entry(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(debug=debug, force=True)


def _build_table(
    data: Path, config: Optional[Path], page_size: Optional[int]
) -> DataTableViewModel:
    rows = load_rows(data)
    table_config = load_table_config(config) if config else infer_table_config(rows)
    logger.debug("Loaded %d rows from %s", len(rows), data)
    return build_data_table_viewmodel(
        rows,
        table_config.column_defs(),
        table_config.options,
        page_size=page_size,
    )


@app.command("preview")
def preview(
    data: Path = typer.Argument(..., help="JSON or YAML file holding a list of rows."),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML table config (columns and options)."
    ),
    search: str = typer.Option("", "--search", "-s", help="Search query."),
    sort: Optional[str] = typer.Option(None, "--sort", help="Column key to sort by."),
    descending: bool = typer.Option(
        False, "--descending", help="Sort descending instead of ascending."
    ),
    page: int = typer.Option(1, "--page", "-p", help="Page to show (clamped)."),
    page_size: Optional[int] = typer.Option(
        None, "--page-size", help="Rows per page (overrides config)."
    ),
    hide: Optional[List[str]] = typer.Option(
        None, "--hide", help="Column key to hide (repeatable)."
    ),
    select: Optional[List[str]] = typer.Option(
        None, "--select", help="Row id to select (repeatable)."
    ),
    select_page: bool = typer.Option(
        False, "--select-page", help="Toggle selection of every row on the page."
    ),
) -> None:
    """Render one page of a row file as the data table would show it."""
    console = Console()
    try:
        table = _build_table(data, config, page_size)
    except FCError as exc:
        console.print(theme.render_message("error", format_error(exc)))
        raise typer.Exit(1)

    for key in hide or []:
        if key not in {col.key for col in table.columns}:
            console.print(theme.render_message("warning", f"Unknown column: {key}"))
        table.toggle_column(key)
    table.set_search_query(search)
    if sort:
        column = next((col for col in table.columns if col.key == sort), None)
        if column is None:
            console.print(theme.render_message("warning", f"Unknown column: {sort}"))
        elif not column.sortable:
            console.print(theme.render_message("warning", f"Column is not sortable: {sort}"))
        table.handle_sort(sort)
        if descending:
            table.handle_sort(sort)
    table.go_to_page(page)
    for row_id in select or []:
        table.toggle_row(row_id)
    if select_page:
        table.toggle_all_rows()

    snapshot = table.snapshot()
    model = build_data_table_model(snapshot, table.options, title=data.name)
    console.print(
        build_rich_table(
            model,
            console=console,
            show_lines=snapshot.show_borders,
            border_style=theme.RICH_BORDER_STYLE,
            header_style=theme.RICH_ACCENT_BOLD,
            title_style=theme.RICH_ACCENT_BOLD,
        )
    )
    if table.options.show_selection or snapshot.selected_ids:
        console.print(theme.render_message("info", selection_summary(snapshot)))


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
