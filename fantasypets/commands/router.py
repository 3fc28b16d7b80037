# fantasypets/commands/router.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, Union

from fantasypets.commands.responses import ChatColor, Messages, colored
from fantasypets.commands.descriptors import ArgumentSpec, CommandSpec
from fantasypets.host.sender import CommandSender, Player

log = logging.getLogger(__name__)

DEFAULT_TOKEN = "default"


class CommandResult(Enum):
    HANDLED = "handled"
    NOT_HANDLED = "not_handled"

    @classmethod
    def coerce(cls, value) -> "CommandResult":
        """Anything but HANDLED (or a literal True) counts as not handled."""
        if value is cls.HANDLED or value is True:
            return cls.HANDLED
        return cls.NOT_HANDLED


class Arguments:
    """Read-only view over the tokens typed after the command label."""

    def __init__(self, args: Optional[Sequence[str]] = None):
        self._args: Tuple[str, ...] = tuple(args or ())

    def get(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._args):
            return self._args[index]
        return None

    @property
    def size(self) -> int:
        return len(self._args)

    def __len__(self) -> int:
        return len(self._args)

    def as_list(self) -> List[str]:
        return list(self._args)

    def __repr__(self) -> str:
        return f"Arguments({list(self._args)!r})"


Spec = Union[ArgumentSpec, CommandSpec]


@dataclass(frozen=True)
class Route:
    spec: Spec
    handler: Callable

    @property
    def is_argument(self) -> bool:
        return isinstance(self.spec, ArgumentSpec)


@dataclass(frozen=True)
class Match:
    route: Route
    # the descriptor whose permission/admin flag applies
    requirement: Spec


class DispatchTable:
    """
    Token -> handler table for one command class. Argument routes are
    consulted before command routes; within a kind, declaration order wins.
    """

    def __init__(self, routes: Sequence[Route] = ()):
        self.argument_routes: List[Route] = [r for r in routes if r.is_argument]
        self.command_routes: List[Route] = [r for r in routes if not r.is_argument]

    @classmethod
    def from_class(cls, klass) -> "DispatchTable":
        handlers = {}
        for base in reversed(klass.__mro__):
            for attr, value in vars(base).items():
                spec = getattr(value, "__route_spec__", None)
                if spec is not None:
                    handlers[attr] = Route(spec=spec, handler=value)
                else:
                    # an undecorated override hides the inherited route
                    handlers.pop(attr, None)
        return cls(list(handlers.values()))

    def resolve(self, token: str) -> Optional[Match]:
        for route in self.argument_routes:
            if route.spec.matches(token):
                return Match(route=route, requirement=route.spec)
        for route in self.command_routes:
            if route.spec.matches(token):
                nested = route.spec.find_argument(token)
                return Match(route=route, requirement=nested or route.spec)
        return None

    def tokens(self) -> List[str]:
        result = []
        for route in self.argument_routes + self.command_routes:
            for token in route.spec.tokens():
                if token != DEFAULT_TOKEN and token not in result:
                    result.append(token)
        return result

    def argument_specs(self) -> Tuple[ArgumentSpec, ...]:
        return tuple(r.spec for r in self.argument_routes)


def is_operator(sender: CommandSender) -> bool:
    """Only an op player counts; the console does not."""
    return isinstance(sender, Player) and sender.is_op()


class CommandRouter:
    def __init__(self, table: DispatchTable, owner, messages: Optional[Messages] = None):
        self.table = table
        self.owner = owner
        self.messages = messages or Messages()

    def route(self, sender: CommandSender, command, label: str,
              args: Optional[Sequence[str]]) -> bool:
        arguments = Arguments(args)
        first = arguments.get(0)
        sub = first.lower() if first is not None else DEFAULT_TOKEN

        match = self.table.resolve(sub) or self.table.resolve(DEFAULT_TOKEN)
        if match is None:
            log.debug(f"No handler for /{label} {sub}")
            sender.send_message(colored(self.messages.unknown_command, ChatColor.RED))
            return True

        denial = self._authorize(sender, match.requirement)
        if denial:
            log.debug(f"Denied /{label} {sub} for {sender.name}")
            sender.send_message(colored(denial, ChatColor.RED))
            return True

        try:
            result = match.route.handler(self.owner, sender, command, label, arguments)
        except (RuntimeError, ValueError) as e:
            log.warning(f"/{label} {sub} failed for {sender.name}: {e}")
            sender.send_message(colored(str(e), ChatColor.RED))
            return True
        except Exception:
            # nothing may cross into the host's command loop
            log.exception(f"Unhandled error in /{label} {sub} for {sender.name}")
            sender.send_message(colored(self.messages.command_error, ChatColor.RED))
            return True
        return CommandResult.coerce(result) is CommandResult.HANDLED

    def _authorize(self, sender: CommandSender, requirement: Spec) -> Optional[str]:
        if requirement.is_admin and not is_operator(sender):
            return self.messages.admin_only
        if requirement.permission and not sender.has_permission(requirement.permission):
            return self.messages.no_permission
        return None

    def tab_complete(self, sender: CommandSender, command, alias: str,
                     args: Optional[Sequence[str]]) -> List[str]:
        if args is None or len(args) != 1:
            return []
        prefix = args[0].lower()
        return [t for t in self.table.tokens() if t.lower().startswith(prefix)]
