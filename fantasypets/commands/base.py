# fantasypets/commands/base.py

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, TYPE_CHECKING

from fantasypets.commands.responses import ChatColor, Messages, colored
from fantasypets.commands.router import (
    Arguments, CommandResult, CommandRouter, DispatchTable,
)
from fantasypets.commands.descriptors import ArgumentSpec, CommandSpec
from fantasypets.host.command import HostCommand

if TYPE_CHECKING:
    from fantasypets.commands.registrar import RegistrationLedger
    from fantasypets.host.sender import CommandSender

__all__ = [
    "Arguments",
    "CommandResult",
    "PluginCommand",
    "argument",
    "handles",
]

log = logging.getLogger(__name__)


def argument(token: str, aliases: Iterable[str] = (), permission: str = "",
             is_admin: bool = False):
    """Mark a method as the handler for one subcommand token."""
    spec = ArgumentSpec(token=token, aliases=tuple(aliases),
                        permission=permission, is_admin=is_admin)

    def decorator(func):
        func.__route_spec__ = spec
        return func
    return decorator


def handles(name: str, aliases: Iterable[str] = (), permission: str = "",
            is_admin: bool = False, arguments: Iterable[ArgumentSpec] = ()):
    """
    Mark a method as the handler for a named group: it answers to the
    group name, its aliases, and every nested argument token. A nested
    argument's permission/admin flag replaces the group's when it matched.
    """
    spec = CommandSpec(name=name, permission=permission, is_admin=is_admin,
                       aliases=tuple(aliases), arguments=tuple(arguments))

    def decorator(func):
        func.__route_spec__ = spec
        return func
    return decorator


class RoutedCommand(HostCommand):
    """The server-side face of a PluginCommand."""

    def __init__(self, owner: "PluginCommand", spec: CommandSpec,
                 description: str, usage: str, permission_message: str):
        super().__init__(spec.name, description, usage, spec.aliases)
        self.owner = owner
        if spec.permission:
            self.permission = spec.permission
        self.permission_message = permission_message

    def execute(self, sender, label, args) -> bool:
        return self.owner.on_command(sender, self, label, args)

    def tab_complete(self, sender, alias, args) -> List[str]:
        return list(self.owner.on_tab_complete(sender, self, alias, args))


class PluginCommand:
    """
    Base class for plugin commands.

    Subclasses set the class attributes below and decorate handler methods
    with @argument or @handles. Handlers are called as
    handler(sender, command, label, args) and return a CommandResult.
    Creating an instance queues the command with the registration ledger;
    it becomes usable once the ledger is flushed.
    """

    # Every subclass must override name
    name: str = ""
    description: str = ""
    usage: str = ""
    aliases: Tuple[str, ...] = ()
    permission: str = ""
    is_admin: bool = False

    _table: DispatchTable = DispatchTable()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._table = DispatchTable.from_class(cls)

    def __init__(self, ledger: "RegistrationLedger", messages: Optional[Messages] = None):
        spec = self.command_spec()
        self.messages = messages or Messages()
        self.router = CommandRouter(self._table, self, self.messages)
        self.command = RoutedCommand(
            self, spec,
            description=self.description,
            usage=self.usage or f"/{spec.name}",
            permission_message=colored(self.messages.no_permission, ChatColor.RED),
        )
        ledger.enqueue(spec.name, spec.permission, spec.is_admin, self.command)

    @classmethod
    def command_spec(cls) -> CommandSpec:
        return CommandSpec(
            name=cls.name,
            permission=cls.permission,
            is_admin=cls.is_admin,
            aliases=tuple(cls.aliases),
            arguments=cls._table.argument_specs(),
        )

    def on_command(self, sender: "CommandSender", command: HostCommand, label: str,
                   args: Optional[Sequence[str]]) -> bool:
        return self.router.route(sender, command, label, args)

    def on_tab_complete(self, sender: "CommandSender", command: HostCommand, alias: str,
                        args: Optional[Sequence[str]]) -> List[str]:
        return self.router.tab_complete(sender, command, alias, args)

    def send(self, sender: "CommandSender", text: str,
             color: ChatColor = ChatColor.WHITE) -> None:
        sender.send_message(colored(text, color))
