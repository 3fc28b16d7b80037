# fantasypets/host/server.py

import logging
from typing import Dict, Iterable, Optional

from fantasypets.host.command import SimpleCommandMap
from fantasypets.host.sender import ConsoleSender, Player

log = logging.getLogger(__name__)


class Server:
    """Minimal stand-in for the game server that hosts the plugin."""

    def __init__(self, command_map: Optional[SimpleCommandMap] = None):
        self.command_map = command_map if command_map is not None else SimpleCommandMap()
        self.console = ConsoleSender()
        self.players: Dict[str, Player] = {}

    def add_player(self, name: str, permissions: Optional[Iterable[str]] = None,
                   op: bool = False) -> Player:
        player = Player(name, permissions=permissions, op=op)
        self.players[name.lower()] = player
        log.info(f"{name} joined the game")
        return player

    def get_player(self, name: str) -> Optional[Player]:
        return self.players.get(name.lower())

    def dispatch_command(self, sender, command_line: str) -> bool:
        return self.command_map.dispatch(sender, command_line)
