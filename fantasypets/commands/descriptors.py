# fantasypets/commands/descriptors.py

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class ArgumentSpec:
    """A subcommand token (plus aliases) and what it takes to use it."""
    token: str
    aliases: Tuple[str, ...] = ()
    permission: str = ""
    is_admin: bool = False

    def __post_init__(self):
        object.__setattr__(self, "aliases", tuple(self.aliases))

    def tokens(self) -> Tuple[str, ...]:
        return (self.token,) + self.aliases

    def matches(self, token: str) -> bool:
        token = token.lower()
        return any(t.lower() == token for t in self.tokens())


@dataclass(frozen=True)
class CommandSpec:
    """
    Describes a command: its name, aliases, the permission/admin
    requirements, and the argument tokens nested under it.
    """
    name: str
    permission: str = ""
    is_admin: bool = False
    aliases: Tuple[str, ...] = ()
    arguments: Tuple[ArgumentSpec, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Command name must not be blank")
        object.__setattr__(self, "aliases", tuple(self.aliases))
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def matches_name(self, token: str) -> bool:
        token = token.lower()
        return self.name.lower() == token or any(a.lower() == token for a in self.aliases)

    def find_argument(self, token: str) -> Optional[ArgumentSpec]:
        for arg in self.arguments:
            if arg.matches(token):
                return arg
        return None

    def matches(self, token: str) -> bool:
        return self.matches_name(token) or self.find_argument(token) is not None

    def tokens(self) -> Tuple[str, ...]:
        result = (self.name,) + self.aliases
        for arg in self.arguments:
            result += arg.tokens()
        return result
