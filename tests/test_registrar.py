import logging

import pytest

from fantasypets.commands.registrar import (
    AliasCommand, CommandMapNotFoundError, RegistrationLedger,
)
from fantasypets.host.command import HostCommand, SimpleCommandMap
from fantasypets.host.sender import Player
from fantasypets.host.server import Server


class EchoCommand(HostCommand):
    def __init__(self, name, aliases=()):
        super().__init__(name, "echo things", "/echo", aliases)
        self.permission = "echo.use"
        self.permission_message = "nope"
        self.executed = []

    def execute(self, sender, label, args):
        self.executed.append((label, list(args)))
        return True

    def tab_complete(self, sender, alias, args):
        return ["hello", "world"]


class CountingMap(SimpleCommandMap):
    def __init__(self):
        super().__init__()
        self.installs = []

    def register(self, fallback_prefix, command):
        self.installs.append(command.name)
        return super().register(fallback_prefix, command)


@pytest.fixture
def server():
    return Server(command_map=CountingMap())


@pytest.fixture
def ledger(server):
    return RegistrationLedger(server)


def test_flush_registers_name_and_aliases(server, ledger):
    echo = EchoCommand("echo", aliases=("say", "말"))
    ledger.enqueue("echo", "echo.use", False, echo)
    assert len(ledger.pending) == 1

    assert ledger.flush_all("TestPlugin") == 3
    assert server.command_map.installs == ["echo", "say", "말"]
    assert server.command_map.get_command("echo") is echo
    assert server.command_map.get_command("testplugin:echo") is echo
    assert isinstance(server.command_map.get_command("say"), AliasCommand)
    assert ledger.registered_names == frozenset({"echo", "say", "말"})
    assert ledger.registered_count == 3
    assert ledger.pending == []


def test_flush_twice_installs_once(server, ledger):
    echo = EchoCommand("echo", aliases=("say",))
    ledger.enqueue("echo", "echo.use", False, echo)
    ledger.flush_all("TestPlugin")
    names_after_first = ledger.registered_names

    ledger.enqueue("echo", "echo.use", False, echo)
    assert ledger.flush_all("TestPlugin") == 0
    assert server.command_map.installs == ["echo", "say"]
    assert ledger.registered_names == names_after_first
    assert ledger.registered_count == 2
    assert ledger.pending == []


def test_reload_warning_logged_once(ledger, caplog):
    ledger.enqueue("echo", "", False, EchoCommand("echo"))
    ledger.flush_all("TestPlugin")

    with caplog.at_level(logging.WARNING, logger="fantasypets.commands.registrar"):
        ledger.enqueue("echo", "", False, EchoCommand("echo"))
        ledger.flush_all("TestPlugin")
        ledger.flush_all("TestPlugin")
    warnings = [r for r in caplog.records if "reload" in r.getMessage()]
    assert len(warnings) == 1


def test_no_warning_when_nothing_was_registered(ledger, caplog):
    with caplog.at_level(logging.WARNING, logger="fantasypets.commands.registrar"):
        ledger.flush_all("TestPlugin")
        ledger.flush_all("TestPlugin")
    assert caplog.records == []


def test_existing_server_command_is_not_replaced(server, ledger):
    other = EchoCommand("echo")
    server.command_map.register("otherplugin", other)

    mine = EchoCommand("echo", aliases=("say",))
    ledger.enqueue("echo", "", False, mine)
    assert ledger.flush_all("TestPlugin") == 1
    assert server.command_map.get_command("echo") is other
    assert "echo" not in ledger.registered_names
    assert "say" in ledger.registered_names


def test_alias_shim_forwards(server, ledger):
    echo = EchoCommand("echo", aliases=("say",))
    ledger.enqueue("echo", "echo.use", False, echo)
    ledger.flush_all("TestPlugin")

    shim = server.command_map.get_command("say")
    player = Player("steve")
    assert shim.execute(player, "say", ["hi"]) is True
    assert echo.executed == [("say", ["hi"])]
    assert shim.tab_complete(player, "say", ["h"]) == ["hello", "world"]
    assert shim.permission == "echo.use"
    assert shim.permission_message == "nope"
    assert shim.description == "echo things"
    assert shim.usage == ""


def test_missing_command_map_is_fatal():
    class BrokenServer:
        command_map = None

    ledger = RegistrationLedger(BrokenServer())
    ledger.enqueue("echo", "", False, EchoCommand("echo"))
    with pytest.raises(CommandMapNotFoundError):
        ledger.flush_all("TestPlugin")


def test_command_map_is_located_once(server, ledger):
    ledger.flush_all("TestPlugin")
    original = server.command_map
    server.command_map = None
    ledger.enqueue("echo", "", False, EchoCommand("echo"))
    assert ledger.flush_all("TestPlugin") == 1
    assert original.get_command("echo") is not None
