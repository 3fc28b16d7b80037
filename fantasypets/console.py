# fantasypets/console.py

import logging

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.formatted_text import ANSI
import yaml

from fantasypets.commands.responses import ChatColor, colored, to_ansi

log = logging.getLogger(__name__)


class CommandCompleter(Completer):
    """Feeds the server's tab completion into prompt_toolkit."""

    def __init__(self, server, sender):
        self.server = server
        self.sender = sender

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if text.startswith("."):
            return
        word = text.rsplit(" ", 1)[-1].lstrip("/")
        for suggestion in self.server.command_map.tab_complete(self.sender, text):
            yield Completion(suggestion, start_position=-len(word))


class Console:
    """
    Interactive console for driving the plugin outside a real server.
    Lines are run as commands for the current sender; lines starting with
    a dot are local: .reload, .quit
    """

    def __init__(self, server, plugin, sender=None):
        self.server = server
        self.plugin = plugin
        self.sender = sender or server.console
        self.session = PromptSession(
            completer=CommandCompleter(server, self.sender),
            complete_while_typing=False,
        )

    def run(self):
        self._print(colored(f"{self.plugin.name} console, running as {self.sender.name}. "
                            "Tab completes, .quit exits.", ChatColor.GOLD))
        while True:
            try:
                line = self.session.prompt("> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle_line(line.strip()):
                break

    def handle_line(self, line: str) -> bool:
        """Run one console line. Returns False when the console should exit."""
        if not line:
            return True
        if line.startswith("."):
            return self._local_command(line[1:].lower())

        if not self.server.dispatch_command(self.sender, line):
            label = line.lstrip("/").split(" ", 1)[0]
            self.sender.send_message(colored(f"Unknown command: {label}", ChatColor.RED))
        self._flush_messages()
        return True

    def _local_command(self, cmd: str) -> bool:
        if cmd in ("quit", "exit"):
            return False
        if cmd == "reload":
            try:
                self.plugin.reload()
            except (RuntimeError, AssertionError, yaml.YAMLError) as e:
                log.error(f"Reload rejected: {e}")
                self._print(colored(f"Reload failed: {e}", ChatColor.RED))
            else:
                self._print(colored("Plugin reloaded.", ChatColor.GREEN))
        else:
            self._print(colored(f"Unknown console command: .{cmd}", ChatColor.RED))
        return True

    def _flush_messages(self):
        for message in self.sender.drain_messages():
            self._print(message)

    def _print(self, message: str):
        print_formatted_text(ANSI(to_ansi(message)))
