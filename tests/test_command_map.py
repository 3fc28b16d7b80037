from fantasypets.host.command import HostCommand, SimpleCommandMap
from fantasypets.host.sender import Player


class FlakyCommand(HostCommand):
    def __init__(self, result):
        super().__init__("flaky", usage="/<command> <thing>")
        self.result = result
        self.seen = []

    def execute(self, sender, label, args):
        self.seen.append(args)
        return self.result

    def tab_complete(self, sender, alias, args):
        return [a.upper() for a in args]


def test_register_label_and_prefixed_label():
    cmap = SimpleCommandMap()
    cmd = FlakyCommand(True)
    assert cmap.register("MyPlugin", cmd) is True
    assert cmap.get_command("FLAKY") is cmd
    assert cmap.get_command("myplugin:flaky") is cmd


def test_second_registration_keeps_first_label():
    cmap = SimpleCommandMap()
    first, second = FlakyCommand(True), FlakyCommand(True)
    cmap.register("one", first)
    assert cmap.register("two", second) is False
    assert cmap.get_command("flaky") is first
    assert cmap.get_command("two:flaky") is second


def test_dispatch_splits_arguments():
    cmap = SimpleCommandMap()
    cmd = FlakyCommand(True)
    cmap.register("p", cmd)
    assert cmap.dispatch(Player("steve"), "/flaky a b") is True
    assert cmd.seen == [["a", "b"]]


def test_dispatch_unknown_label():
    assert SimpleCommandMap().dispatch(Player("steve"), "/nothing") is False


def test_dispatch_sends_usage_when_not_handled():
    cmap = SimpleCommandMap()
    cmap.register("p", FlakyCommand(False))
    sender = Player("steve")
    cmap.dispatch(sender, "flaky")
    assert sender.messages == ["/flaky <thing>"]


def test_tab_complete_labels_and_arguments():
    cmap = SimpleCommandMap()
    cmap.register("p", FlakyCommand(True))
    sender = Player("steve")
    assert cmap.tab_complete(sender, "/fl") == ["flaky"]
    assert cmap.tab_complete(sender, "flaky ab") == ["AB"]
    assert cmap.tab_complete(sender, "missing ab") == []


def test_permissions_and_ops():
    player = Player("steve", permissions=["Pets.List"])
    assert player.has_permission("pets.list")
    assert not player.has_permission("pets.info")
    player.set_op(True)
    assert player.has_permission("pets.info")


def test_host_command_permission_check():
    cmd = FlakyCommand(True)
    assert cmd.test_permission(Player("steve"))
    cmd.permission = "flaky.use"
    assert not cmd.test_permission(Player("steve"))
    assert cmd.test_permission(Player("alex", permissions=["flaky.use"]))
