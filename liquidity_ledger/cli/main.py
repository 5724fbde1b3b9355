"""CLI entry point for the Liquidity Incentive Ledger.

Usage:
    liquidity-ledger pairs state.yaml
    liquidity-ledger top state.json --limit 3 --output json
    liquidity-ledger details state.yaml ETH USDC
    liquidity-ledger demo --step
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..core.config import get_config
from ..core.exceptions import LedgerError
from ..core.types import OutputFormat
from ..ledger import Ledger
from ..output.formatters import OutputFormatter, TableFormatter, get_formatter
from ..state_file import read_state_file

SAMPLE_STATE_PATH = Path(__file__).parent.parent / "data" / "sample_state.yaml"

# Initialize app
app = typer.Typer(
    name="liquidity-ledger",
    help="Stake-weighted liquidity incentives for token pairs",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )


def _formatter(output: str) -> OutputFormatter:
    try:
        return get_formatter(output)
    except ValueError:
        console.print(f"[red]Invalid output format: {output}[/]")
        console.print("Valid formats: " + ", ".join(f.value for f in OutputFormat))
        raise typer.Exit(1)


def _load_ledger(state: Path, renormalize: bool = False) -> Ledger:
    ledger = Ledger(get_config())
    ledger.bulk_load(read_state_file(state))
    if renormalize:
        ledger.renormalize_voting_power()
    return ledger


def _fail(error: LedgerError) -> None:
    console.print(f"[red]Error: {error.message}[/]", soft_wrap=True)
    raise typer.Exit(1)


STATE_ARG = typer.Argument(..., help="JSON or YAML file with preferences and ownership")
OUTPUT_OPT = typer.Option("table", "--output", "-o", help="Output format: table, json, csv")
RENORMALIZE_OPT = typer.Option(
    False, "--renormalize", "-r", help="Renormalize voting power before aggregating"
)
VERBOSE_OPT = typer.Option(False, "--verbose", "-v", help="Enable verbose logging")


@app.command()
def pairs(
    state: Path = STATE_ARG,
    renormalize: bool = RENORMALIZE_OPT,
    output: str = OUTPUT_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Show the aggregated incentive of every token pair."""
    setup_logging(verbose)
    formatter = _formatter(output)

    try:
        ledger = _load_ledger(state, renormalize)
        result = list(ledger.compute_incentivized_pairs().values())
    except LedgerError as e:
        _fail(e)

    typer.echo(formatter.format_pairs(result))


@app.command()
def top(
    state: Path = STATE_ARG,
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", help="Number of pairs to show (default 5)"
    ),
    renormalize: bool = RENORMALIZE_OPT,
    output: str = OUTPUT_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Show the most incentivized token pairs."""
    setup_logging(verbose)
    formatter = _formatter(output)

    try:
        ledger = _load_ledger(state, renormalize)
        result = ledger.top_incentivized_pairs(limit)
    except LedgerError as e:
        _fail(e)

    typer.echo(formatter.format_pairs(result))


@app.command()
def details(
    state: Path = STATE_ARG,
    token_a: str = typer.Argument(..., help="First token of the pair"),
    token_b: str = typer.Argument(..., help="Second token of the pair"),
    renormalize: bool = RENORMALIZE_OPT,
    output: str = OUTPUT_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Show one pair's incentive broken down by address."""
    setup_logging(verbose)
    formatter = _formatter(output)

    try:
        ledger = _load_ledger(state, renormalize)
        result = ledger.pair_details(token_a, token_b)
    except LedgerError as e:
        _fail(e)

    typer.echo(formatter.format_details(result))


@app.command()
def normalize(
    state: Path = STATE_ARG,
    address: str = typer.Argument(..., help="Address whose weights to normalize"),
    output: str = OUTPUT_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Show an address's preference weights normalized to sum to 1."""
    setup_logging(verbose)
    formatter = _formatter(output)

    try:
        ledger = _load_ledger(state)
        result = ledger.normalize_preferences(address)
    except LedgerError as e:
        _fail(e)

    typer.echo(formatter.format_preferences(address, result))


@app.command()
def ownership(
    state: Path = STATE_ARG,
    address: Optional[str] = typer.Argument(None, help="Address to show (default: all)"),
    renormalize: bool = RENORMALIZE_OPT,
    output: str = OUTPUT_OPT,
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Show ownership stakes and voting power."""
    setup_logging(verbose)
    formatter = _formatter(output)

    try:
        ledger = _load_ledger(state, renormalize)
        if address is None:
            records = ledger.get_snapshot().ownership
        else:
            records = {address: ledger.get_ownership(address)}
    except LedgerError as e:
        _fail(e)

    typer.echo(formatter.format_ownership(records))


@app.command()
def demo(
    step: bool = typer.Option(False, "--step", "-s", help="Pause before each step"),
    verbose: bool = VERBOSE_OPT,
) -> None:
    """Walk through the ledger features on a two-address sample."""
    setup_logging(verbose)
    formatter = TableFormatter()

    def section(title: str) -> None:
        if step:
            console.input(f"\n[bold]{title}[/] (press Enter)")
        else:
            console.print(f"\n[bold]{title}[/]")

    try:
        ledger = Ledger(get_config())
        ledger.bulk_load(read_state_file(SAMPLE_STATE_PATH))

        section("Step 1: Initial state")
        typer.echo(formatter.format_state(ledger.get_snapshot()))

        section("Step 2: Normalized weights")
        for address in ("address1", "address2"):
            typer.echo(formatter.format_preferences(address, ledger.normalize_preferences(address)))

        section("Step 3: Ownership details")
        typer.echo(formatter.format_ownership(
            {a: ledger.get_ownership(a) for a in ("address1", "address2")}
        ))

        section("Step 4: Incentivized pairs")
        typer.echo(formatter.format_pairs(list(ledger.compute_incentivized_pairs().values())))

        section("Step 5: Top 3 incentivized pairs")
        typer.echo(formatter.format_pairs(ledger.top_incentivized_pairs(3)))

        section("Step 6: ETH-USDC pair details")
        typer.echo(formatter.format_details(ledger.pair_details("ETH", "USDC")))

        section("Step 7: Add ETH-USDT preference for address1")
        ledger.upsert_preference("address1", "ETH", "USDT", 0.4)
        console.print("[green]Added preference ETH-USDT (0.4)[/]")

        section("Step 8: Updated state")
        typer.echo(formatter.format_state(ledger.get_snapshot()))

        section("Step 9: Reset")
        ledger.reset()
        console.print("State has been reset to empty")

        section("Step 10: Final state")
        typer.echo(formatter.format_state(ledger.get_snapshot()))
    except LedgerError as e:
        _fail(e)

    console.print("\n[bold]Demo complete[/]")


@app.command()
def version() -> None:
    """Show version information."""
    from .. import __version__
    console.print(f"Liquidity Incentive Ledger v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
