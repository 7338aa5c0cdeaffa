"""Materialise every due recurring transaction for every user.

Meant to run once a day from cron. Each user is processed against their
own calendar date, so running late or twice is harmless.

Usage:
    python -m billwise.scripts.process_recurring
    python -m billwise.scripts.process_recurring --dry-run
    python -m billwise.scripts.process_recurring --verbose
"""
from __future__ import annotations

import sys

from rich.console import Console
from rich.table import Table

from billwise.clock import resolve_timezone
from billwise.db import initialize_db
from billwise.logging import configure_logging
from billwise.models import format_amount
from billwise.repositories.factory import (
    get_recurring_template_repository,
    get_transaction_repository,
    get_user_repository,
)
from billwise.services.recurring_service import RecurringService

console = Console()


def main() -> None:
    dry_run = "--dry-run" in sys.argv
    verbose = "--verbose" in sys.argv

    configure_logging("DEBUG" if verbose else None)
    initialize_db()

    template_repo = get_recurring_template_repository()
    user_repo = get_user_repository()
    service = RecurringService(template_repo, get_transaction_repository(), user_repo)

    user_ids = template_repo.list_user_ids_with_auto_create()
    if not user_ids:
        console.print("[yellow]No active auto-create templates.[/yellow]")
        return

    table = Table(title="Recurring templates due for processing")
    table.add_column("#", style="dim")
    table.add_column("User", style="bold")
    table.add_column("Template")
    table.add_column("Frequency")
    table.add_column("Amount", justify="right")
    table.add_column("Today", style="dim")

    count = 0
    for user_id in user_ids:
        user = user_repo.get_by_id(user_id)
        if user is None:
            continue
        today = service.clock.today(resolve_timezone(user.timezone))
        for template in template_repo.list_auto_create(user_id):
            count += 1
            table.add_row(
                str(template.id),
                user.username,
                template.title,
                template.frequency.value,
                format_amount(template.amount, template.currency),
                today.isoformat(),
            )

    console.print(table)
    console.print(f"\nTotal templates: [bold]{count}[/bold]")

    if dry_run:
        console.print("\n[yellow]--dry-run: no transactions were created.[/yellow]")
        return

    console.print("\n[cyan]Processing...[/cyan]\n")

    total, per_user = service.process_all()
    for result in per_user:
        console.print(
            f"  [green]✓[/green] user {result.user_id}: "
            f"{result.created} created, {result.skipped} skipped"
        )
    for error in total.errors:
        console.print(f"  [red]✗[/red] {error}")

    console.print(
        f"\n[green bold]{total.processed} template(s) processed, "
        f"{total.created} transaction(s) created.[/green bold]"
    )
    if total.errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
