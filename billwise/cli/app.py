import questionary
from rich.console import Console

from billwise.cli.bill_menu import bill_alerts_menu
from billwise.cli.recurring_menu import recurring_menu
from billwise.cli.user_menu import user_management_menu
from billwise.repositories.factory import (
    get_bill_repository,
    get_recurring_template_repository,
    get_transaction_repository,
    get_user_repository,
)
from billwise.services.bill_service import BillService
from billwise.services.recurring_service import RecurringService
from billwise.services.user_service import UserService

console = Console()


def _build_services() -> tuple[UserService, BillService, RecurringService]:
    user_repo = get_user_repository()
    bill_repo = get_bill_repository()
    template_repo = get_recurring_template_repository()
    transaction_repo = get_transaction_repository()
    return (
        UserService(user_repo),
        BillService(bill_repo),
        RecurringService(template_repo, transaction_repo, user_repo),
    )


def main_menu() -> None:
    user_service, bill_service, recurring_service = _build_services()

    console.print()
    console.print("[bold]Billwise[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "Bill Alerts",
                "Recurring Transactions",
                "Manage Users",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "Bill Alerts":
            bill_alerts_menu(user_service, bill_service)
        elif choice == "Recurring Transactions":
            recurring_menu(user_service, recurring_service)
        elif choice == "Manage Users":
            user_management_menu(user_service)
