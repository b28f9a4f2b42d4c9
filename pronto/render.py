"""Rich renderables for daily and period statistics."""

from datetime import date

from rich.table import Table
from rich.text import Text

from pronto.duration import format_minutes
from pronto.models import DailyResult, PeriodSummary


def _format_balance(minutes: int) -> Text:
    if minutes > 0:
        return Text(f"+{format_minutes(minutes)}", style="green")
    if minutes < 0:
        return Text(format_minutes(minutes), style="red")
    return Text(format_minutes(minutes))


def daily_table(result: DailyResult, target_date: date | None = None) -> Table:
    """Build a two-column table describing one day."""
    title = target_date.strftime("%Y-%m-%d (%a)") if target_date else None
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("Stat", style="bold")
    table.add_column("Value")

    table.add_row("Worked", result.worked)
    table.add_row("Target", result.target)
    table.add_row("Balance", _format_balance(result.balance_minutes))
    table.add_row(
        "Session",
        Text("open", style="bold yellow") if result.is_session_open else Text("closed"),
    )
    if result.predicted_exit is not None:
        prediction = Text(result.predicted_exit, style="bold cyan")
        if result.crosses_midnight:
            prediction.append(" (+1 day)", style="dim")
        table.add_row("Leave at", prediction)
    return table


def period_table(summary: PeriodSummary) -> Table:
    """Build a table with one row per day and the running balance."""
    table = Table(title="Period", zebra_stripes=True)
    table.add_column("Date", width=13)
    table.add_column("Worked", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Day", justify="right")
    table.add_column("Balance", justify="right")

    for target_date, result in summary.days.items():
        table.add_row(
            target_date.strftime("%m/%d (%a)"),
            result.worked,
            result.target,
            _format_balance(result.balance_minutes),
            _format_balance(summary.daily_balances[target_date]),
        )
    return table
