from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from billwise.models.user import User
from billwise.services.user_service import UserService

console = Console()


def select_user(user_service: UserService) -> User | None:
    users = user_service.list_users()
    if not users:
        console.print("[yellow]No users registered.[/yellow]")
        return None

    choices = [u.username for u in users] + ["Back"]
    username = questionary.select("Select user:", choices=choices).ask()
    if username is None or username == "Back":
        return None
    return next((u for u in users if u.username == username), None)


def user_management_menu(user_service: UserService) -> None:
    while True:
        choice = questionary.select(
            "Manage Users",
            choices=[
                "Create User",
                "Change Timezone",
                "List Users",
                "Back",
            ],
        ).ask()

        if choice is None or choice == "Back":
            break
        elif choice == "Create User":
            _create_user(user_service)
        elif choice == "Change Timezone":
            _change_timezone(user_service)
        elif choice == "List Users":
            _list_users(user_service)


def _create_user(user_service: UserService) -> None:
    console.print()
    console.print("[bold]New User[/bold]", style="cyan")

    username = questionary.text("Username:").ask()
    if not username:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    email = questionary.text("Email (optional):").ask() or ""
    timezone = questionary.text("Timezone (e.g. Asia/Kolkata, blank for none):").ask() or ""

    try:
        user = user_service.create_user(username, email=email, timezone=timezone)
        console.print(f"[green bold]User '{user.username}' created![/green bold]")
    except ValueError as e:
        console.print(f"[red]Could not create user: {e}[/red]")


def _change_timezone(user_service: UserService) -> None:
    console.print()
    console.print("[bold]Change Timezone[/bold]", style="cyan")

    user = select_user(user_service)
    if user is None:
        return

    timezone = questionary.text("New timezone:", default=user.timezone).ask()
    if timezone is None:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    user.timezone = timezone.strip()
    try:
        user_service.update_user(user)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return
    console.print(f"[green bold]Timezone for '{user.username}' set to {user.timezone or '-'}[/green bold]")


def _list_users(user_service: UserService) -> None:
    users = user_service.list_users()

    if not users:
        console.print("[yellow]No users registered.[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("#", style="dim")
    table.add_column("Username", style="bold")
    table.add_column("Timezone")
    table.add_column("Reminder")
    table.add_column("Created")

    for u in users:
        created = u.created_at.strftime("%d/%m/%Y %H:%M") if u.created_at else "-"
        reminder = u.expense_reminder_time if u.expense_reminders else "off"
        table.add_row(str(u.id), u.username, u.timezone or "-", reminder, created)

    console.print()
    console.print(table)
    console.print()
