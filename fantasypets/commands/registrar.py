# fantasypets/commands/registrar.py

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from fantasypets.host.command import CommandMap, HostCommand

log = logging.getLogger(__name__)


class CommandMapNotFoundError(RuntimeError):
    """ the server does not expose a usable command map """


@dataclass
class PendingRegistration:
    name: str
    permission: str
    is_admin: bool
    command: HostCommand


class AliasCommand(HostCommand):
    """
    Makes an alias label run the original command. The server only
    installs the label a command is registered under, so each alias gets
    one of these. Usage text is left empty.
    """

    def __init__(self, alias: str, original: HostCommand):
        super().__init__(alias, original.description, "", [])
        self.original = original
        self.permission = original.permission
        self.permission_message = original.permission_message

    def execute(self, sender, label, args) -> bool:
        return self.original.execute(sender, label, args)

    def tab_complete(self, sender, alias, args) -> List[str]:
        return list(self.original.tab_complete(sender, alias, args))


class RegistrationLedger:
    """
    Queues commands as they are constructed and installs them into the
    server's command map on flush_all(). Create one per process and keep it
    across plugin reloads: the set of installed names only grows, so a
    second flush of the same commands installs nothing.

    Not thread-safe; the server calls plugins from its main thread only.
    """

    def __init__(self, server):
        self._server = server
        self._command_map: Optional[CommandMap] = None
        self._pending: List[PendingRegistration] = []
        self._registered: set = set()
        self._registered_count = 0
        self._warned_reload = False

    def _get_command_map(self) -> CommandMap:
        if self._command_map is not None:
            return self._command_map
        command_map = getattr(self._server, "command_map", None)
        if not isinstance(command_map, CommandMap):
            raise CommandMapNotFoundError(
                f"server {self._server!r} has no usable command map")
        self._command_map = command_map
        return command_map

    def enqueue(self, name: str, permission: str, is_admin: bool,
                command: HostCommand) -> None:
        log.debug(f"Queued /{name} for registration")
        self._pending.append(PendingRegistration(name, permission, is_admin, command))

    @property
    def pending(self) -> List[PendingRegistration]:
        return list(self._pending)

    @property
    def registered_names(self) -> FrozenSet[str]:
        return frozenset(self._registered)

    @property
    def registered_count(self) -> int:
        return self._registered_count

    def flush_all(self, namespace: str) -> int:
        """Install every queued command and alias. Returns how many were installed."""
        if self._registered_count > 0 and not self._warned_reload:
            log.warning("Detected plugin reload! Commands already registered "
                        "in this process will not be registered again.")
            self._warned_reload = True

        cmap = self._get_command_map()
        prefix = namespace.lower()
        count = 0
        lines = []
        for pending in self._pending:
            if self._install(cmap, prefix, pending.name, pending.command):
                count += 1
                admin = ", admin" if pending.is_admin else ""
                lines.append(f"- {pending.name} (permission: {pending.permission}{admin})")

            for alias in pending.command.aliases:
                if self._install(cmap, prefix, alias, AliasCommand(alias, pending.command)):
                    count += 1
                    lines.append(f"- {alias} (alias for {pending.name})")

        self._registered_count += count
        if count > 0:
            log.info(f"{count} custom command(s) registered:\n" + "\n".join(lines))
        self._pending.clear()
        return count

    def _install(self, cmap: CommandMap, prefix: str, name: str,
                 command: HostCommand) -> bool:
        if name in self._registered:
            return False
        if cmap.get_command(name) is not None:
            log.debug(f"/{name} already exists on the server, skipping")
            return False
        cmap.register(prefix, command)
        self._registered.add(name)
        return True
