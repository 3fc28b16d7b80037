# fantasypets/host/command.py

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from fantasypets.host.sender import CommandSender

log = logging.getLogger(__name__)


class HostCommand:
    """A command as the server sees it: metadata plus execute/tab_complete."""

    def __init__(self, name: str, description: str = "", usage: str = "",
                 aliases: Optional[Iterable[str]] = None):
        self.name = name
        self.description = description
        self.usage = usage
        self.aliases: List[str] = list(aliases or [])
        self.permission: Optional[str] = None
        self.permission_message: Optional[str] = None

    def execute(self, sender: CommandSender, label: str, args: List[str]) -> bool:
        raise NotImplementedError(
            f"{self.__class__.__name__} does not implement execute")

    def tab_complete(self, sender: CommandSender, alias: str, args: List[str]) -> List[str]:
        return []

    def test_permission(self, sender: CommandSender) -> bool:
        if not self.permission:
            return True
        return sender.has_permission(self.permission)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} /{self.name} aliases={self.aliases!r}>"


class CommandMap(ABC):
    """The parts of the server's command map a plugin gets to use."""

    @abstractmethod
    def register(self, fallback_prefix: str, command: HostCommand) -> bool:
        ...

    @abstractmethod
    def get_command(self, name: str) -> Optional[HostCommand]:
        ...


class SimpleCommandMap(CommandMap):
    """
    In-memory command map. A command is reachable under its own label and
    under "prefix:label"; aliases are not installed automatically, callers
    that want them register a separate command per alias.
    """

    def __init__(self):
        self._known: Dict[str, HostCommand] = {}

    def register(self, fallback_prefix: str, command: HostCommand) -> bool:
        label = command.name.lower().strip()
        prefix = fallback_prefix.lower().strip()
        self._known.setdefault(f"{prefix}:{label}", command)
        if label in self._known:
            log.debug(f"Label {label} already taken, only {prefix}:{label} registered")
            return False
        self._known[label] = command
        return True

    def get_command(self, name: str) -> Optional[HostCommand]:
        return self._known.get(name.lower())

    def known_labels(self) -> List[str]:
        return sorted(self._known)

    def dispatch(self, sender: CommandSender, command_line: str) -> bool:
        """Run a command line. Returns False if no such command exists."""
        line = command_line.lstrip("/")
        parts = line.split(" ")
        label = parts[0].lower()
        command = self.get_command(label)
        if command is None:
            return False

        handled = command.execute(sender, label, parts[1:])
        if not handled and command.usage:
            for usage_line in command.usage.replace("<command>", label).split("\n"):
                sender.send_message(usage_line)
        return True

    def tab_complete(self, sender: CommandSender, command_line: str) -> List[str]:
        line = command_line.lstrip("/")
        if " " not in line:
            prefix = line.lower()
            return [label for label in self.known_labels() if label.startswith(prefix)]

        parts = line.split(" ")
        command = self.get_command(parts[0])
        if command is None:
            return []
        return command.tab_complete(sender, parts[0].lower(), parts[1:])
