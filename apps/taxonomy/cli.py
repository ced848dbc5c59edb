"""
Emoji Taxonomy CLI
Command-line interface for building the GitHub emoji taxonomy
"""

import asyncio
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from apps.taxonomy.categorizer import taxonomy_stats
from apps.taxonomy.processor import TaxonomyProcessor, load_taxonomy, write_taxonomy
from core.config import get_config
from core.exceptions import TaxonomyError

app = typer.Typer(help="Emoji Taxonomy - GitHub shortcodes by Unicode category")


def setup_logging(verbose: bool = False):
    """Configure logging for the taxonomy builder"""
    config = get_config()
    log_level = "DEBUG" if verbose else config.log_level

    # Remove default logger
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>TAXONOMY</cyan> | {message}",
        level=log_level,
        colorize=True,
    )

    if config.log_to_file:
        log_file = config.logs_dir / f"taxonomy_{datetime.now().strftime('%Y%m%d')}.log"
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | TAXONOMY | {message}",
            level="DEBUG",
            rotation="1 day",
            retention="7 days",
        )


@app.command()
def build(
    identifiers_file: Optional[Path] = typer.Option(
        None,
        "--identifiers-file",
        exists=True,
        dir_okay=False,
        help="Local copy of the GitHub emoji JSON",
    ),
    reference_file: Optional[Path] = typer.Option(
        None,
        "--reference-file",
        exists=True,
        dir_okay=False,
        help="Local copy of full-emoji-list.txt",
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output JSON path (default: OUTPUT_PATH)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Categorize and report without writing output"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Fetch both sources, categorize every identifier and write the taxonomy"""
    setup_logging(verbose)
    config = get_config()
    output_path = output or Path(config.output_path)

    try:
        processor = TaxonomyProcessor()
        taxonomy = asyncio.run(processor.run(identifiers_file, reference_file))
    except TaxonomyError as e:
        logger.error(f"Taxonomy build failed: {e}")
        raise typer.Exit(1)

    if dry_run:
        logger.info("Dry run: output not written")
        return

    write_taxonomy(taxonomy, output_path)
    logger.success("Taxonomy build completed")


@app.command()
def summary(
    path: Optional[Path] = typer.Argument(
        None, help="Taxonomy JSON to summarize (default: OUTPUT_PATH)"
    ),
):
    """Show category counts for a written taxonomy"""
    config = get_config()
    taxonomy_path = path or Path(config.output_path)

    if not taxonomy_path.exists():
        typer.echo(f"No taxonomy found at {taxonomy_path}", err=True)
        raise typer.Exit(1)

    stats = taxonomy_stats(load_taxonomy(taxonomy_path))
    for category, counts in stats["categories"].items():
        typer.echo(
            f"{category}: {counts['subcategories']} subcategories, "
            f"{counts['groups']} groups, {counts['identifiers']} identifiers"
        )
    typer.echo(
        f"TOTAL: {stats['total_categories']} categories, "
        f"{stats['total_groups']} groups, {stats['total_identifiers']} identifiers"
    )


if __name__ == "__main__":
    app()
