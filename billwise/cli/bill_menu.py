from __future__ import annotations

from rich.console import Console
from rich.table import Table

from billwise.cli.user_menu import select_user
from billwise.constants import BUCKET_LABELS, STATUS_LABELS
from billwise.models import format_amount
from billwise.models.bill import BillAlert, BillAlerts, Bucket
from billwise.services.bill_service import BillService
from billwise.services.user_service import UserService

console = Console()


def _days_label(days: int) -> str:
    if days < 0:
        return f"{-days} day(s) late"
    if days == 0:
        return "today"
    return f"in {days} day(s)"


def _alert_table(title: str, alerts: list[BillAlert]) -> Table:
    table = Table(title=title)
    table.add_column("Bill", style="bold")
    table.add_column("Due")
    table.add_column("When")
    table.add_column("Status", style="dim")
    table.add_column("Amount", justify="right")

    for alert in alerts:
        table.add_row(
            alert.bill.title,
            alert.bill.due_date,
            _days_label(alert.days_until_due),
            STATUS_LABELS[alert.bill.bill_status],
            format_amount(alert.bill.amount, alert.bill.currency),
        )
    return table


def show_alerts(alerts: BillAlerts) -> None:
    if alerts.total == 0 and not alerts.errors:
        console.print("[green]Nothing due. All caught up![/green]")
        return

    for bucket, group in (
        (Bucket.OVERDUE, alerts.overdue),
        (Bucket.REMINDER_DUE, alerts.reminders),
        (Bucket.UPCOMING, alerts.upcoming),
    ):
        if group:
            console.print(_alert_table(BUCKET_LABELS[bucket], group))

    for error in alerts.errors:
        console.print(f"[red]Bill {error.bill_uuid or error.bill_id}: {error.error}[/red]")


def bill_alerts_menu(user_service: UserService, bill_service: BillService) -> None:
    user = select_user(user_service)
    if user is None:
        return

    alerts = bill_service.alerts(user)
    console.print()
    console.print(
        f"[bold]Alerts for {user.username}[/bold] [dim]({alerts.today:%d/%m/%Y}, {alerts.timezone})[/dim]",
        style="cyan",
    )
    show_alerts(alerts)
    console.print()
