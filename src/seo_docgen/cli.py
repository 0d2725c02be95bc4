"""
Command-line interface for SEO DocGen.

Builds the content improvement Word document from a saved
document-generation request (the JSON the web client posts).
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .docx_writer import DocxWriter
from .errors import DocGenError, EmptyContentError, RequestValidationError
from .filename_generator import generate_output_path
from .models import BlockKind, RenderedDocument
from .schemas import DocumentGenerationRequest

console = Console()


@click.command()
@click.argument(
    "request_json",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for the Word document (default: <Client>_<Page>_Improvement.docx).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
def main(request_json: Path, output: Optional[Path], verbose: bool) -> None:
    """
    SEO DocGen - Build the content improvement document.

    Reads a document-generation request (crawled page, optimized content,
    keywords, settings) and writes a Word document with every keyword
    insertion and adjustment highlighted in green.

    Examples:

        seo-docgen request.json

        seo-docgen request.json -o acme-about.docx --verbose
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    console.print(Panel.fit(
        "[bold blue]SEO DocGen[/bold blue]\n"
        "Rendering annotated content to a highlighted Word document",
        border_style="blue",
    ))

    try:
        with console.status("[bold green]Loading request..."):
            request = DocumentGenerationRequest.from_file(request_json)
            if verbose:
                console.print(f"  Loaded request from: {request_json}")
                console.print(f"  Client: {request.client_name}  Page: {request.page_name}")

        output_path = output or generate_output_path(request)

        with console.status("[bold green]Writing output document..."):
            writer = DocxWriter()
            output_path = writer.write(request, output_path)

        _display_summary(writer.rendered, request, output_path, verbose)

        console.print(f"\n[bold green]Success![/bold green] Output saved to: {output_path}")

    except RequestValidationError as e:
        console.print(f"[red]Request error:[/red] {escape(str(e))}")
        sys.exit(1)
    except EmptyContentError as e:
        console.print(f"[red]Content error:[/red] {escape(str(e))}")
        sys.exit(1)
    except DocGenError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Could not write document:[/red] {escape(str(e))}")
        sys.exit(1)


def _display_summary(
    rendered: Optional[RenderedDocument],
    request: DocumentGenerationRequest,
    output_path: Path,
    verbose: bool,
) -> None:
    """Display document summary."""
    if rendered is None:
        return

    console.print("\n[bold]Document Summary[/bold]")

    blocks_table = Table(title="Rendered Blocks", show_header=True)
    blocks_table.add_column("Kind", style="cyan")
    blocks_table.add_column("Count", style="green", justify="right")

    all_blocks = ([rendered.title] if rendered.title else []) + rendered.blocks
    for kind in BlockKind:
        count = sum(1 for block in all_blocks if block.kind is kind)
        if count:
            blocks_table.add_row(kind.value, str(count))

    console.print(blocks_table)

    highlighted = sum(1 for block in all_blocks if block.has_highlights)
    console.print(f"\n[cyan]Blocks with highlights:[/cyan] {highlighted}")
    console.print(f"[cyan]{rendered.changes.describe()}[/cyan]")

    faqs = request.analysis_result.optimized_content.faqs
    if faqs:
        console.print(f"[cyan]FAQ items:[/cyan] {len(faqs)}")

    if verbose:
        for block in rendered.level_one_headings:
            console.print(f"  H1: {block.plain_text}")
        console.print(f"\n[dim]Output file: {output_path}[/dim]")


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
