"""
InteractionManager - the numeric mode menu.

1 - Collect VSCode config → Configs/<timestamp>/
2 - Sync latest snapshot → VSCode user dir

Any other answer is an invalid selection and ends the run.
"""

from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from ..runner.state import Mode, parse_choice


class InteractionManager:
    """
    Asks the user which operation to run.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def ask_mode(self) -> Optional[Mode]:
        """
        Show the menu and read one answer.

        Returns:
            The chosen Mode, or None for an invalid selection (including EOF)
        """
        self.console.print()
        self.console.print("[bold]Select mode:[/]")
        self.console.print("  [bold green]1[/] - Collect VSCode config → Configs/<timestamp>/")
        self.console.print("  [bold green]2[/] - Sync latest snapshot → VSCode user dir")

        try:
            choice = Prompt.ask(
                "[bold]Enter number and press Enter[/]",
                console=self.console,
                default="",
                show_default=False,
            )
        except EOFError:
            return None

        return parse_choice(choice)
