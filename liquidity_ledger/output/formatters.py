"""Output formatters for ledger results.

Provides multiple output formats:
- JSON: Machine-readable, complete data
- CSV: Spreadsheet-compatible, one row per record
- Table: Human-readable CLI output
"""

import csv
import io
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

from rich.console import Console
from rich.table import Table

from ..core.models import (
    IncentivizedPair,
    LedgerState,
    OwnershipRecord,
    PairIncentiveDetails,
    PreferenceRecord,
)
from ..core.types import Address, OutputFormat

logger = logging.getLogger(__name__)


class OutputFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format_pairs(self, pairs: Sequence[IncentivizedPair]) -> str:
        """Format a list of incentivized pairs."""
        pass

    @abstractmethod
    def format_details(self, details: PairIncentiveDetails) -> str:
        """Format one pair's incentive breakdown."""
        pass

    @abstractmethod
    def format_preferences(self, address: Address, records: Sequence[PreferenceRecord]) -> str:
        """Format one address's preference list."""
        pass

    @abstractmethod
    def format_ownership(self, ownership: dict[Address, OwnershipRecord]) -> str:
        """Format ownership records keyed by address."""
        pass

    @abstractmethod
    def format_state(self, state: LedgerState) -> str:
        """Format a full ledger snapshot."""
        pass


class JSONFormatter(OutputFormatter):
    """Formats results as JSON."""

    def __init__(self, indent: int = 2):
        """
        Initialize JSON formatter.

        Args:
            indent: JSON indentation level
        """
        self.indent = indent

    def _dumps(self, data: Any) -> str:
        return json.dumps(data, indent=self.indent)

    def format_pairs(self, pairs: Sequence[IncentivizedPair]) -> str:
        return self._dumps([p.model_dump() for p in pairs])

    def format_details(self, details: PairIncentiveDetails) -> str:
        return self._dumps(details.model_dump())

    def format_preferences(self, address: Address, records: Sequence[PreferenceRecord]) -> str:
        return self._dumps({address: [r.model_dump() for r in records]})

    def format_ownership(self, ownership: dict[Address, OwnershipRecord]) -> str:
        return self._dumps({a: r.model_dump() for a, r in ownership.items()})

    def format_state(self, state: LedgerState) -> str:
        return self._dumps(state.model_dump())


class CSVFormatter(OutputFormatter):
    """Formats results as CSV, one row per record."""

    def __init__(self, delimiter: str = ","):
        """
        Initialize CSV formatter.

        Args:
            delimiter: CSV delimiter
        """
        self.delimiter = delimiter

    def _write(self, header: list[str], rows: list[list[Any]]) -> str:
        output = io.StringIO()
        writer = csv.writer(output, delimiter=self.delimiter)
        writer.writerow(header)
        writer.writerows(rows)
        return output.getvalue()

    def format_pairs(self, pairs: Sequence[IncentivizedPair]) -> str:
        rows = [
            [p.pair_key, p.token_a, p.token_b, f"{p.total_incentive:.6f}", p.contributor_count]
            for p in pairs
        ]
        return self._write(["Pair", "Token A", "Token B", "Total Incentive", "Contributors"], rows)

    def format_details(self, details: PairIncentiveDetails) -> str:
        rows = [
            [
                details.pair_key,
                address,
                f"{value:.6f}",
                f"{details.normalized_contributions.get(address, 0.0):.6f}",
            ]
            for address, value in details.contributions.items()
        ]
        return self._write(["Pair", "Address", "Contribution", "Share"], rows)

    def format_preferences(self, address: Address, records: Sequence[PreferenceRecord]) -> str:
        rows = [[address, r.token_a, r.token_b, f"{r.weight:.6f}"] for r in records]
        return self._write(["Address", "Token A", "Token B", "Weight"], rows)

    def format_ownership(self, ownership: dict[Address, OwnershipRecord]) -> str:
        rows = [
            [a, f"{r.stake_fraction:.6f}", r.token_count, f"{r.voting_power:.6f}"]
            for a, r in ownership.items()
        ]
        return self._write(["Address", "Stake Fraction", "Tokens", "Voting Power"], rows)

    def format_state(self, state: LedgerState) -> str:
        rows = [
            [address, r.token_a, r.token_b, f"{r.weight:.6f}"]
            for address, records in state.preferences.items()
            for r in records
        ]
        return self._write(["Address", "Token A", "Token B", "Weight"], rows)


class TableFormatter(OutputFormatter):
    """Formats results as human-readable tables for CLI output."""

    def __init__(self, use_rich: bool = True, width: int = 100):
        """
        Initialize table formatter.

        Args:
            use_rich: Use rich tables with colors; plain text otherwise
            width: Maximum table width
        """
        self.use_rich = use_rich
        self.width = width

    def _render(self, *tables: Table) -> str:
        output = io.StringIO()
        console = Console(file=output, force_terminal=True, width=self.width)
        for table in tables:
            console.print(table)
        return output.getvalue()

    def format_pairs(self, pairs: Sequence[IncentivizedPair]) -> str:
        if not self.use_rich:
            lines = [f"  {'#':>3}  {'Pair':<24} {'Incentive':>12}  Contributors", "  " + "-" * 56]
            for rank, p in enumerate(pairs, 1):
                lines.append(
                    f"  {rank:>3}  {p.pair_key:<24} {p.total_incentive:>12.6f}  {p.contributor_count}"
                )
            if not pairs:
                lines.append("  No incentivized pairs")
            return "\n".join(lines)

        table = Table(title="Incentivized Pairs")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Pair", style="cyan")
        table.add_column("Total Incentive", justify="right", style="green")
        table.add_column("Contributors", justify="right")
        for rank, p in enumerate(pairs, 1):
            table.add_row(str(rank), p.pair_key, f"{p.total_incentive:.6f}", str(p.contributor_count))
        return self._render(table)

    def format_details(self, details: PairIncentiveDetails) -> str:
        if not self.use_rich:
            lines = [
                f"PAIR {details.pair_key}",
                "-" * 40,
                f"  Total Incentive: {details.total_incentive:.6f}",
                f"  {'Address':<24} {'Contribution':>12} {'Share':>8}",
            ]
            for address, value in details.contributions.items():
                share = details.normalized_contributions.get(address, 0.0)
                lines.append(f"  {address:<24} {value:>12.6f} {share:>7.1%}")
            return "\n".join(lines)

        table = Table(title=f"{details.pair_key} (total {details.total_incentive:.6f})")
        table.add_column("Address", style="cyan")
        table.add_column("Contribution", justify="right", style="green")
        table.add_column("Share", justify="right")
        for address, value in details.contributions.items():
            share = details.normalized_contributions.get(address, 0.0)
            table.add_row(address, f"{value:.6f}", f"{share:.1%}")
        return self._render(table)

    def format_preferences(self, address: Address, records: Sequence[PreferenceRecord]) -> str:
        if not self.use_rich:
            lines = [f"PREFERENCES {address}", "-" * 40]
            lines.extend(f"  {r.token_a}/{r.token_b:<16} {r.weight:>10.6f}" for r in records)
            return "\n".join(lines)

        table = self._preference_table(f"Preferences: {address}", [(address, r) for r in records])
        return self._render(table)

    def format_ownership(self, ownership: dict[Address, OwnershipRecord]) -> str:
        if not self.use_rich:
            lines = [f"  {'Address':<24} {'Stake':>10} {'Tokens':>14} {'Voting Power':>13}"]
            for a, r in ownership.items():
                lines.append(
                    f"  {a:<24} {r.stake_fraction:>10.6f} {r.token_count:>14,} {r.voting_power:>13.6f}"
                )
            return "\n".join(lines)

        return self._render(self._ownership_table(ownership))

    def format_state(self, state: LedgerState) -> str:
        if not self.use_rich:
            lines = ["OWNERSHIP", "-" * 40, self.format_ownership(state.ownership), ""]
            lines.extend(["PREFERENCES", "-" * 40])
            for address, records in state.preferences.items():
                lines.extend(f"  {address:<24} {r.token_a}/{r.token_b} {r.weight:.6f}" for r in records)
            return "\n".join(lines)

        rows = [(a, r) for a, records in state.preferences.items() for r in records]
        return self._render(
            self._ownership_table(state.ownership),
            self._preference_table("Preferences", rows),
        )

    def _ownership_table(self, ownership: dict[Address, OwnershipRecord]) -> Table:
        table = Table(title="Ownership")
        table.add_column("Address", style="cyan")
        table.add_column("Stake Fraction", justify="right")
        table.add_column("Tokens", justify="right")
        table.add_column("Voting Power", justify="right", style="green")
        for a, r in ownership.items():
            table.add_row(a, f"{r.stake_fraction:.6f}", f"{r.token_count:,}", f"{r.voting_power:.6f}")
        return table

    def _preference_table(self, title: str, rows: list[tuple[Address, PreferenceRecord]]) -> Table:
        table = Table(title=title)
        table.add_column("Address", style="cyan")
        table.add_column("Pair")
        table.add_column("Weight", justify="right", style="green")
        for address, r in rows:
            table.add_row(address, f"{r.token_a}/{r.token_b}", f"{r.weight:.6f}")
        return table


def get_formatter(output: OutputFormat | str) -> OutputFormatter:
    """Return the formatter for an output format name."""
    fmt = OutputFormat(output.lower() if isinstance(output, str) else output)
    if fmt == OutputFormat.JSON:
        return JSONFormatter()
    if fmt == OutputFormat.CSV:
        return CSVFormatter()
    return TableFormatter()
