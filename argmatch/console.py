# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances for argmatch output."""
from rich.console import Console
from rich.theme import Theme

ARGMATCH_THEME = Theme(
    {
        "usage": "bold",
        "heading": "bold cyan",
        "flag": "green",
        "metavar": "yellow",
        "error": "bold red",
        "dim": "dim",
    }
)

console = Console(theme=ARGMATCH_THEME, highlight=False)
error_console = Console(theme=ARGMATCH_THEME, highlight=False, stderr=True)
