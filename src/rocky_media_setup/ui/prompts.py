"""Interactive yes/no confirmation gate."""

import readchar
from rich.console import Console
from rich.markup import escape

YES_KEYS = ("y", "Y")
NO_KEYS = ("n", "N")
ENTER_KEYS = ("\r", "\n", readchar.key.ENTER)


class ConfirmationGate:
    """Ask a yes/no question and wait for a single key press.

    Enter picks the default. Ctrl-C raises KeyboardInterrupt and aborts the
    process. With assume_yes no input is read and each question takes its
    default, so consent questions pass with default=True and a reinstall
    question that defaults to no stays no.
    """

    def __init__(self, console: Console | None = None, assume_yes: bool = False):
        self.console = console or Console()
        self.assume_yes = assume_yes

    def __call__(self, question: str, default: bool = False) -> bool:
        hint = "[Y/n]" if default else "[y/N]"
        self.console.print(f"[bold]{escape(question)}[/bold] {escape(hint)} ", end="")

        if self.assume_yes:
            self.console.print(f"[dim]{'yes' if default else 'no'} (--yes)[/dim]")
            return default

        while True:
            key = readchar.readkey()
            if key in YES_KEYS:
                answer = True
            elif key in NO_KEYS:
                answer = False
            elif key in ENTER_KEYS:
                answer = default
            else:
                self.console.print()
                self.console.print("[yellow]Please answer 'y/n'.[/yellow] ", end="")
                continue
            self.console.print("yes" if answer else "no")
            return answer
