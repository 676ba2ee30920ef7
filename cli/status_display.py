"""Status display functionality for CLI"""

from rich.table import Table

from utils.storage import CredentialStore


def show_token_status(store: CredentialStore, console):
    """
    Display credential store status

    Args:
        store: Credential store to inspect
        console: Rich console for output
    """
    status = store.status()

    table = Table(title="Credential Status")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Authorized", "Yes" if status["is_authorized"] else "No")
    table.add_row("Access Token", "Yes" if status["has_access_token"] else "No")
    table.add_row("Pending Authorization", "Yes" if status["has_pending_authorization"] else "No")
    table.add_row("Store", status["location"])

    console.print(table)
