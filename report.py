from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from stats import RoundRecord, chart_rows, longest_label_width, overall_rate, rank_records


FILLED = "██"
BLANK = "  "


class StatsReporter:
    """Post-session report: ranked table, bar chart and overall rate."""

    def __init__(self, console: Console, rows: int = 15) -> None:
        self.console = console
        self.rows = rows

    def report(self, records: Sequence[RoundRecord]) -> None:
        if not records:
            self.console.print("No values found!", style="red")
            return

        self.console.print(self.build_table(records))
        for line in self.build_chart(records):
            self.console.print(line)
        self.console.print()
        self.console.print(f"Average time per character overall: {overall_rate(records):.2f}")

    def build_table(self, records: Sequence[RoundRecord]) -> Table:
        width = longest_label_width(records)
        table = Table(show_header=False, box=None, show_edge=False, pad_edge=False)
        table.add_column("Answer", min_width=width, no_wrap=True)
        table.add_column("Word", min_width=width, no_wrap=True)
        table.add_column("Time", justify="right", no_wrap=True)
        table.add_column("Rate", justify="right", no_wrap=True)

        for record in rank_records(records):
            table.add_row(
                record.user_answer,
                record.source_word,
                f"{record.elapsed_seconds:.2f}s",
                f"{record.rate:.2f}s/char",
            )
        return table

    def build_chart(self, records: Sequence[RoundRecord]) -> list[Text]:
        lines = []
        for cells in chart_rows(records, self.rows):
            line = Text()
            for index, filled in enumerate(cells):
                if index:
                    line.append(" ")
                if filled:
                    line.append(FILLED, style="green")
                else:
                    line.append(BLANK)
            lines.append(line)
        return lines
