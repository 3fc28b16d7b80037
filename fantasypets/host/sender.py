# fantasypets/host/sender.py

from typing import Iterable, List, Optional


class CommandSender:
    """Anything that can issue commands: players and the server console."""

    def __init__(self, name: str, permissions: Optional[Iterable[str]] = None,
                 op: bool = False):
        self.name = name
        self.permissions = {p.lower() for p in (permissions or [])}
        self._op = op
        self.messages: List[str] = []

    def is_op(self) -> bool:
        return self._op

    def set_op(self, value: bool) -> None:
        self._op = value

    def has_permission(self, node: str) -> bool:
        # unregistered nodes default to op-only, same as the server does
        return node.lower() in self.permissions or self._op

    def add_permission(self, node: str) -> None:
        self.permissions.add(node.lower())

    def send_message(self, message: str) -> None:
        self.messages.append(message)

    def drain_messages(self) -> List[str]:
        """Return and forget everything sent so far."""
        messages, self.messages = self.messages, []
        return messages

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r} op={self._op}>"


class Player(CommandSender):
    pass


class ConsoleSender(CommandSender):
    """The server console. It is op, but it is not a player."""

    def __init__(self, name: str = "CONSOLE"):
        super().__init__(name, op=True)
