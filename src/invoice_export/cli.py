#!/usr/bin/env python3
"""
Invoice Export CLI
Converts invoice PDFs into a ZIP of header and line item CSV files.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from .config import Settings, configure_logging
from .csv_writer import HEADER_COLUMNS, LINE_COLUMNS, format_number
from .exceptions import ConfigurationError
from .models import InvoiceData
from .parser import InvoiceParser

logger = logging.getLogger(__name__)

console = Console()


def _parse_file(pdf_path: str) -> InvoiceData:
    parser = InvoiceParser()
    return parser.parse_pdf(Path(pdf_path).read_bytes())


def invoice_to_dict(invoice: InvoiceData) -> dict:
    """JSON-friendly view of an invoice; absent values stay ``None``."""
    header = invoice.header
    return {
        "header": {
            "customer": header.customer,
            "rep": header.rep,
            "date": header.date,
            "invoice": header.invoice,
            "zip": header.zip,
        },
        "tableIndex": invoice.table_index if invoice.table_index >= 0 else None,
        "lineItems": [
            {
                "activity": item.activity,
                "description": item.description,
                "qty": format_number(item.qty) if item.qty is not None else None,
                "rate": format_number(item.rate) if item.rate is not None else None,
                "amount": format_number(item.amount) if item.amount is not None else None,
            }
            for item in invoice.line_items
        ],
    }


def _print_tables(invoice: InvoiceData) -> None:
    header = invoice.header
    header_table = Table(title="Invoice Header")
    for column in HEADER_COLUMNS:
        header_table.add_column(column)
    header_table.add_row(*(value or "" for value in
                           (header.customer, header.rep, header.date, header.invoice, header.zip)))
    console.print(header_table)

    title = f"Line Items ({len(invoice.line_items)})"
    if invoice.table_index >= 0:
        title += f" from line {invoice.table_index + 1}"
    lines_table = Table(title=title)
    for column in LINE_COLUMNS:
        lines_table.add_column(column, justify="right" if column in ("Qty", "Rate", "Amount") else "left")
    for item in invoice.line_items:
        lines_table.add_row(
            item.activity,
            item.description,
            format_number(item.qty),
            format_number(item.rate),
            format_number(item.amount),
        )
    console.print(lines_table)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Extract invoice header fields and line items from PDFs."""
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        raise click.Abort()
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@cli.command()
@click.argument('pdf_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output ZIP file path')
def export(pdf_path: str, output: Optional[str]):
    """Write the CSV ZIP for an invoice PDF."""
    try:
        archive = InvoiceParser().export_pdf(Path(pdf_path).read_bytes())
    except Exception as e:
        click.echo(f"Error exporting invoice: {e}", err=True)
        raise click.Abort()

    target = Path(output) if output else Path.cwd() / archive.filename
    target.write_bytes(archive.content)
    console.print(f"[green]💾 Saved {target}[/green]")


@cli.command()
@click.argument('pdf_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--json', 'as_json', is_flag=True, help='Print JSON instead of tables')
def show(pdf_path: str, as_json: bool):
    """Print the extracted header and line items."""
    try:
        invoice = _parse_file(pdf_path)
    except Exception as e:
        click.echo(f"Error parsing invoice: {e}", err=True)
        raise click.Abort()

    if as_json:
        click.echo(json.dumps(invoice_to_dict(invoice), indent=2, ensure_ascii=False))
    else:
        _print_tables(invoice)


@cli.command()
@click.option('--host', default=None, help='Interface to bind (default from settings)')
@click.option('--port', type=int, default=None, help='Port to listen on (default from settings)')
@click.pass_obj
def serve(settings: Settings, host: Optional[str], port: Optional[int]):
    """Run the HTTP export service."""
    from .webapp import create_app

    app = create_app(settings)
    app.run(host=host or settings.host, port=port or settings.port)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
