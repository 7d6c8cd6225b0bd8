"""Console styles shared by the searchable CLI commands."""

from rich.console import Console


class Styles:
    """Semantic style names used in CLI markup."""

    HEADER = "bold cyan"
    ACCENT = "cyan"
    VALUE = "white"
    DIM = "dim"
    WARNING = "bold yellow"
    ERROR = "bold red"


class Messages:
    """Markup helpers for one-line status messages."""

    @staticmethod
    def error(message: str) -> str:
        return f"[{Styles.ERROR}]✗ {message}[/{Styles.ERROR}]"

    @staticmethod
    def warning(message: str) -> str:
        return f"[{Styles.WARNING}]⚠ {message}[/{Styles.WARNING}]"


console = Console()
