from billwise.cli.app import main_menu
from billwise.db import initialize_db
from billwise.logging import configure_logging


def main() -> None:
    configure_logging()
    initialize_db()
    main_menu()


if __name__ == "__main__":
    main()
