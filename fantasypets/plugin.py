# fantasypets/plugin.py

import logging
import os

from fantasypets.commands.builtins import PetCommand
from fantasypets.commands.registrar import RegistrationLedger
from fantasypets.commands.responses import Messages
from fantasypets.pets.manager import DefaultPetKeyManager

log = logging.getLogger(__name__)


class FantasyPetsPlugin:
    """Plugin lifecycle: load the pet keys, build the commands, register them."""

    def __init__(self, server, ledger: RegistrationLedger, config):
        self.server = server
        self.ledger = ledger
        self.config = config
        self.name = config.plugin["name"]
        self.data_folder = config.plugin["data_folder"]
        self.messages = Messages.from_config(config)
        self.pets = None
        self.commands = []
        self.enabled = False

    def on_enable(self):
        log.info(f"Enabling {self.name}")
        self.data_folder = self.config.plugin["data_folder"]
        self.messages = Messages.from_config(self.config)
        os.makedirs(self.data_folder, exist_ok=True)
        folder, filename = os.path.split(self.config.pets_path)
        self.pets = DefaultPetKeyManager(folder, filename)
        self.commands = [PetCommand(self)]
        self.ledger.flush_all(self.name)
        self.enabled = True
        log.info(f"{self.name} enabled with {len(self.pets.get_all_pet_keys())} pet keys")

    def on_disable(self):
        log.info(f"Disabling {self.name}")
        self.commands = []
        self.enabled = False

    def reload(self):
        # a rejected config change leaves the plugin enabled as it was
        self.config.reload()
        self.on_disable()
        self.on_enable()
