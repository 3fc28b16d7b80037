# fantasypets/commands/builtins.py

import logging

from fantasypets.commands.base import CommandResult, PluginCommand, argument, handles
from fantasypets.commands.responses import ChatColor
from fantasypets.commands.descriptors import ArgumentSpec
from fantasypets.pets.catalog import DefaultPet, PetVolume

log = logging.getLogger(__name__)

LIST_PERMISSION = "fantasypets.command.list"
INFO_PERMISSION = "fantasypets.command.info"


class PetCommand(PluginCommand):
    name = "pet"
    aliases = ("pets", "펫")
    description = "Browse the fantasy pet catalog"
    usage = "/<command> [list|info <pet>|volume <1-5>|reload]"

    def __init__(self, plugin):
        super().__init__(plugin.ledger, plugin.messages)
        self.plugin = plugin

    @argument("default")
    def show_usage(self, sender, command, label, args):
        self.send(sender, f"FantasyPets: {len(self.plugin.pets.get_all_pet_keys())} pet keys loaded",
                  ChatColor.GOLD)
        self.send(sender, f"/{label} list - list every pet key", ChatColor.GRAY)
        self.send(sender, f"/{label} info <namespace:key|permission> - show one pet", ChatColor.GRAY)
        self.send(sender, f"/{label} volume <1-5> - list the pets of a volume", ChatColor.GRAY)
        return CommandResult.HANDLED

    @argument("list", aliases=("ls",), permission=LIST_PERMISSION)
    def list_pets(self, sender, command, label, args):
        pet_keys = self.plugin.pets.get_all_pet_keys()
        if not pet_keys:
            self.send(sender, "No pet keys are registered.", ChatColor.YELLOW)
            return CommandResult.HANDLED
        self.send(sender, f"{len(pet_keys)} pet key(s):", ChatColor.GOLD)
        for pet_key in pet_keys:
            permission = pet_key.permission or "(none)"
            self.send(sender, f"- {pet_key} [{permission}]")
        return CommandResult.HANDLED

    @argument("info", aliases=("show",), permission=INFO_PERMISSION)
    def pet_info(self, sender, command, label, args):
        query = args.get(1)
        if not query:
            return CommandResult.NOT_HANDLED

        pet_key = self.plugin.pets.resolve(query)
        if pet_key is None:
            self.send(sender, f"No pet key matches {query}.", ChatColor.RED)
            return CommandResult.HANDLED

        self.send(sender, f"Pet {pet_key}", ChatColor.GOLD)
        self.send(sender, f"  permission: {pet_key.permission or '(none)'}")
        # user entries are never validated, so compare the raw strings
        builtin = DefaultPet.from_parts(pet_key.namespace, pet_key.key)
        if builtin is not None:
            self.send(sender, f"  built-in: {builtin.id} (Vol.{builtin.volume.value})")
        else:
            self.send(sender, "  added in pets-data.yml")
        return CommandResult.HANDLED

    @handles("volume", aliases=("vol",), permission=LIST_PERMISSION,
             arguments=[ArgumentSpec(f"vol{v.value}", permission=LIST_PERMISSION)
                        for v in PetVolume])
    def list_volume(self, sender, command, label, args):
        # "/pet vol3" or "/pet volume 3"
        first = args.get(0).lower()
        number = first[len("vol"):] if first.startswith("vol") else ""
        if not number.isdigit():
            number = args.get(1) or ""
        if not number.isdigit() or int(number) not in {v.value for v in PetVolume}:
            return CommandResult.NOT_HANDLED

        volume = PetVolume(int(number))
        self.send(sender, f"Vol.{volume.value} ({volume.namespace}):", ChatColor.GOLD)
        for pet in DefaultPet.by_volume(volume):
            self.send(sender, f"- {pet.id}: {pet.namespaced()} [{pet.meta.permission}]")
        return CommandResult.HANDLED

    @argument("reload", is_admin=True)
    def reload_pets(self, sender, command, label, args):
        self.plugin.pets.load_pet_keys()
        count = len(self.plugin.pets.get_all_pet_keys())
        log.info(f"{sender.name} reloaded pet keys ({count} loaded)")
        self.send(sender, f"Reloaded {count} pet key(s).", ChatColor.GREEN)
        return CommandResult.HANDLED
