from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from billwise.cli.user_menu import select_user
from billwise.clock import resolve_timezone
from billwise.dates import add_days, format_display, parse_date
from billwise.errors import ScheduleError
from billwise.models import format_amount
from billwise.models.recurring import RecurringTemplate
from billwise.services.recurring_service import RecurringService
from billwise.services.user_service import UserService

console = Console()

PROJECTION_DAYS = 30


def recurring_menu(user_service: UserService, recurring_service: RecurringService) -> None:
    while True:
        choice = questionary.select(
            "Recurring Transactions",
            choices=[
                "Project Occurrences",
                "Process Due Transactions",
                "Back",
            ],
        ).ask()

        if choice is None or choice == "Back":
            break
        elif choice == "Project Occurrences":
            _project_occurrences(user_service, recurring_service)
        elif choice == "Process Due Transactions":
            _process(user_service, recurring_service)


def _select_template(templates: list[RecurringTemplate]) -> RecurringTemplate | None:
    labels = {f"{t.title} ({t.frequency.value}, from {t.start_date})": t for t in templates}
    choice = questionary.select("Select template:", choices=[*labels, "Back"]).ask()
    if choice is None or choice == "Back":
        return None
    return labels[choice]


def _project_occurrences(user_service: UserService, recurring_service: RecurringService) -> None:
    user = select_user(user_service)
    if user is None:
        return

    templates = recurring_service.list_templates(user.id)
    if not templates:
        console.print("[yellow]No recurring templates for this user.[/yellow]")
        return

    template = _select_template(templates)
    if template is None:
        return

    today = recurring_service.clock.today(resolve_timezone(user.timezone))
    raw_start = questionary.text("From (YYYY-MM-DD or DD/MM/YYYY):", default=today.isoformat()).ask()
    if raw_start is None:
        return
    try:
        start = parse_date(raw_start)
        end = add_days(start, PROJECTION_DAYS)
        occurrences = recurring_service.occurrences(template, start, end)
    except ScheduleError as e:
        console.print(f"[red]{e}[/red]")
        return

    table = Table(title=f"{template.title}: {format_display(start)} to {format_display(end)}")
    table.add_column("#", style="dim")
    table.add_column("Date", style="bold")
    table.add_column("Amount", justify="right")

    for i, occurrence in enumerate(occurrences, 1):
        table.add_row(str(i), format_display(occurrence.date), format_amount(occurrence.amount, occurrence.currency))

    console.print()
    console.print(table)
    console.print(f"  Total occurrences: [bold]{len(occurrences)}[/bold]")
    console.print()


def _process(user_service: UserService, recurring_service: RecurringService) -> None:
    user = select_user(user_service)
    if user is None:
        return

    result = recurring_service.process_user(user)
    console.print(
        f"[green bold]Processed {result.processed} template(s): "
        f"{result.created} created, {result.skipped} skipped[/green bold]"
    )
    for error in result.errors:
        console.print(f"[red]{error}[/red]")
