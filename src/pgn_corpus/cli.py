"""CLI entry point for building a legal-move corpus from a PGN file."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .errors import CorpusError
from .pipeline import MIN_RATING, PipelineStats, preprocess_pgn_file

console = Console()


def _stats_table(stats: PipelineStats) -> Table:
    table = Table(title="Corpus Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Games read", str(stats.games_seen))
    table.add_row("Games extracted", str(stats.games_extracted))
    table.add_row("Games failing validation", str(stats.games_invalid))
    table.add_row("Lines written", str(stats.lines_written))
    return table


@click.command()
@click.argument(
    "input_path",
    metavar="INPUT",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument(
    "output_path",
    metavar="OUTPUT",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--min-rating",
    "-r",
    default=MIN_RATING,
    show_default=True,
    envvar="PGN_CORPUS_MIN_RATING",
    help="Minimum rating of both players",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Log per-move diagnostics",
)
def main(input_path: Path, output_path: Path, min_rating: int, verbose: bool) -> None:
    """Build a legal-move training corpus from a PGN file.

    Reads games from INPUT, keeps those where both players are rated at
    least --min-rating, and writes one line per move to OUTPUT:

        <FEN> <played_move other_legal_moves ...>

    Example:

        pgn-corpus games.pgn corpus.txt
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    console.print("\n[bold blue]PGN Corpus Builder[/bold blue]")
    console.print(f"Input: [bold cyan]{input_path}[/bold cyan]\n")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Processing [bold cyan]{input_path.name}[/bold cyan]...", total=None)
        try:
            stats = preprocess_pgn_file(input_path, output_path, min_rating=min_rating)
            progress.update(task, completed=True)
        except (CorpusError, OSError) as e:
            progress.stop()
            console.print(f"[red]Error: {e}[/red]")
            raise SystemExit(1) from e

    console.print(_stats_table(stats))
    console.print(f"\n[green]Corpus written to [bold]{output_path}[/bold][/green]")


if __name__ == "__main__":
    main()
