#!/usr/bin/env python3
"""Endpoint failover demo.

Probes a list of resource manager endpoints, fails over if the first one is
not active, and prints the outcome.

Example usage:
    # Two resource managers, gzip probes, verbose logging
    python examples/failover_demo.py http://rm1:8088 http://rm2:8088 --gzip --log-level INFO

    # Bound the whole failover scan to 10 seconds
    python examples/failover_demo.py http://rm1:8088 http://rm2:8088 --deadline 10
"""

from time import perf_counter
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from hafetch import CompressionType, EndpointSelector, NoAliveEndpointError, SelectorConfig
from hafetch.utils.loguru_setup import configure_level

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def main(
    endpoints: list[str] = typer.Argument(..., help="Candidate endpoints in preference order"),
    gzip: bool = typer.Option(False, "--gzip", help="Request gzip-compressed probe responses"),
    attempts: int = typer.Option(2, "--attempts", "-a", help="Probe attempts per candidate"),
    delay: float = typer.Option(1.0, "--delay", "-d", help="Seconds between failed attempts"),
    deadline: Optional[float] = typer.Option(None, "--deadline", help="Upper bound on one failover scan"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Log level"),
) -> None:
    configure_level(log_level)
    config = SelectorConfig(
        max_attempts_per_candidate=attempts,
        delay_between_attempts=delay,
        reselect_deadline=deadline,
    )
    compression = CompressionType.GZIP if gzip else CompressionType.NONE

    table = Table(title="Endpoint selection")
    table.add_column("Step")
    table.add_column("Endpoint")

    with EndpointSelector(endpoints, compression, config=config) as selector:
        table.add_row("Initial", selector.get_current_endpoint())
        started = perf_counter()
        try:
            selector.verify()
        except NoAliveEndpointError as e:
            console.print(f"[bold red]{e}[/bold red]")
            raise typer.Exit(code=1) from e
        table.add_row("Selected", selector.get_current_endpoint())

    console.print(table)
    console.print(f"Verified in {perf_counter() - started:.2f}s")


if __name__ == "__main__":
    app()
