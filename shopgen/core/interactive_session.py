"""Interactive session: runs many commands against one set of services.

The image cache and the rate-limit gate live in memory, so they only pay
off when several generations share a process. The session keeps the
CommandHandler (and everything it holds) alive between commands.
"""

import logging
import shlex
from typing import List, Optional

from shopgen.core.command_handler import CommandHandler
from shopgen.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"exit", "quit"}
HELP_TEXT = (
    "Commands:\n"
    "  generate <product_id> [custom prompt...]\n"
    "  stats            show cache statistics\n"
    "  clear            clear the image cache\n"
    "  status           check the service configuration\n"
    "  products         list catalog products\n"
    "  help             show this help\n"
    "  exit | quit      end the session"
)

class InteractiveSession:
    """Read-dispatch loop over CommandHandler operations."""

    def __init__(self, command_handler: CommandHandler, ui: UserInterface, token: Optional[str] = None):
        self.command_handler = command_handler
        self.ui = ui
        self.token = token
        self.commands_run = 0

    def dispatch(self, line: str) -> bool:
        """Runs one command line. Returns False when the session should end."""
        try:
            words: List[str] = shlex.split(line)
        except ValueError as e:
            self.ui.display_error(f"Could not parse command: {e}")
            return True
        if not words:
            return True

        command, args = words[0].lower(), words[1:]
        if command in EXIT_COMMANDS:
            return False

        self.commands_run += 1
        if command == "generate":
            if not args:
                self.ui.display_error("Usage: generate <product_id> [custom prompt...]")
                return True
            prompt = " ".join(args[1:]) or None
            self.command_handler.handle_generate(args[0], prompt, token=self.token)
        elif command == "stats":
            self.command_handler.handle_cache_stats(token=self.token)
        elif command == "clear":
            self.command_handler.handle_clear_cache(token=self.token)
        elif command == "status":
            self.command_handler.handle_status()
        elif command == "products":
            self.command_handler.handle_list_products()
        elif command == "help":
            self.ui.display_output(HELP_TEXT, title="Help")
        else:
            self.ui.display_error(f"Unknown command '{command}'. Type 'help' for a list.")
        return True

    def start(self) -> None:
        """Prompts for commands until the user exits or closes input."""
        logger.info("Starting interactive session.")
        self.ui.display_info("Interactive session started. Type 'help' for commands, 'exit' to quit.")
        try:
            while self.dispatch(self.ui.get_prompt("shopgen> ")):
                pass
        except (EOFError, KeyboardInterrupt):
            logger.debug("Input closed, ending session.")
        self.ui.display_info("Ending session.")
        logger.info(f"Interactive session ended after {self.commands_run} command(s).")
