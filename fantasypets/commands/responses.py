# fantasypets/commands/responses.py

import re
from dataclasses import dataclass
from enum import Enum

COLOR_CHAR = "§"

_COLOR_CODE_RE = re.compile(f"{COLOR_CHAR}[0-9a-fk-or]", re.IGNORECASE)


class ChatColor(str, Enum):
    """Legacy chat colour codes, the subset the plugin uses."""
    GREEN = "a"
    AQUA = "b"
    RED = "c"
    YELLOW = "e"
    WHITE = "f"
    GRAY = "7"
    GOLD = "6"
    RESET = "r"

    @property
    def code(self) -> str:
        return COLOR_CHAR + self.value


# legacy code -> ANSI SGR
_ANSI = {
    "a": "92", "b": "96", "c": "91", "e": "93",
    "f": "97", "7": "37", "6": "33", "r": "0",
}


def colored(text: str, color: ChatColor) -> str:
    return color.code + text


def strip_colors(text: str) -> str:
    return _COLOR_CODE_RE.sub("", text)


def to_ansi(text: str) -> str:
    """Translate legacy colour codes for a terminal. Unknown codes are dropped."""
    def repl(match):
        code = _ANSI.get(match.group(0)[1].lower())
        return f"\x1b[{code}m" if code else ""
    return _COLOR_CODE_RE.sub(repl, text) + "\x1b[0m"


@dataclass
class Messages:
    """Fixed user-facing replies of the command router."""
    unknown_command: str = "Unknown command."
    no_permission: str = "You do not have permission to use this command."
    admin_only: str = "You do not have permission to use this command."
    command_error: str = "An internal error occurred while running this command."

    @classmethod
    def from_config(cls, config) -> "Messages":
        return cls(
            unknown_command=config.messages["unknown_command"],
            no_permission=config.messages["no_permission"],
            admin_only=config.messages["admin_only"],
            command_error=config.messages["command_error"],
        )
