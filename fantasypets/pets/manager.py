# fantasypets/pets/manager.py

import logging
import os
from abc import ABC, abstractmethod
from typing import List, Optional

import yaml

from fantasypets.pets.catalog import DefaultPet
from fantasypets.pets.keys import PetKeyData

log = logging.getLogger(__name__)

PETS_FILE = "pets-data.yml"


class AbstractPetKeyManager(ABC):
    """
    Holds the pet keys known to the plugin: the built-in ones supplied by
    get_default_pet_keys() plus whatever the server owner lists in
    pets-data.yml. On first run the built-in list is written out so it
    can be edited.
    """

    def __init__(self, data_folder: str, filename: str = PETS_FILE):
        self.data_folder = data_folder
        self.config_file = os.path.join(data_folder, filename)
        self._pet_keys: List[PetKeyData] = []
        self.load_pet_keys()

    def load_pet_keys(self) -> None:
        self._pet_keys.clear()
        self._pet_keys.extend(self.get_default_pet_keys())

        if not os.path.exists(self.config_file):
            self._save_default_config()
            return

        added = 0
        for entry in self._read_user_entries():
            pet_key = self._parse_entry(entry)
            if pet_key is None:
                continue
            # built-ins win; a user entry for the same item is dropped
            if self.find(pet_key.namespace, pet_key.key) is not None:
                log.debug(f"Skipping duplicate pet key {pet_key}")
                continue
            self._pet_keys.append(pet_key)
            added += 1
        log.info(f"Loaded {len(self._pet_keys)} pet keys ({added} from {self.config_file})")

    def _read_user_entries(self) -> list:
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            log.error(f"Could not parse {self.config_file}, using built-in pets only: {e}")
            return []
        except (OSError, UnicodeDecodeError) as e:
            log.error(f"Could not read {self.config_file}, using built-in pets only: {e}")
            return []

        if not isinstance(raw, dict):
            log.warning(f"{self.config_file} is not a mapping, ignoring it")
            return []
        entries = raw.get("pets") or []
        if not isinstance(entries, list):
            log.warning(f"'pets' in {self.config_file} is not a list, ignoring it")
            return []
        return entries

    @staticmethod
    def _parse_entry(entry) -> Optional[PetKeyData]:
        if not isinstance(entry, dict):
            log.debug(f"Skipping pet entry that is not a mapping: {entry!r}")
            return None
        namespace = entry.get("namespace")
        key = entry.get("key")
        if namespace is None or key is None:
            log.debug(f"Skipping pet entry without namespace/key: {entry!r}")
            return None
        permission = entry.get("permission")
        return PetKeyData(
            key=str(key),
            namespace=str(namespace),
            permission="" if permission is None else str(permission),
        )

    def _save_default_config(self) -> None:
        os.makedirs(self.data_folder, exist_ok=True)
        data = {"pets": [pet.to_dict() for pet in self.get_default_pet_keys()]}
        with open(self.config_file, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
        log.info(f"Wrote default pet keys to {self.config_file}")

    def get_all_pet_keys(self) -> List[PetKeyData]:
        return list(self._pet_keys)

    def find(self, namespace: str, key: str) -> Optional[PetKeyData]:
        for pet_key in self._pet_keys:
            if pet_key.namespace == namespace and pet_key.key == key:
                return pet_key
        return None

    def find_by_permission(self, node: str) -> Optional[PetKeyData]:
        for pet_key in self._pet_keys:
            if pet_key.permission and pet_key.permission.lower() == node.lower():
                return pet_key
        return None

    def resolve(self, text: str) -> Optional[PetKeyData]:
        """Look up an entry by "namespace:key" or by permission node."""
        if ":" in text:
            namespace, key = text.split(":", 1)
            found = self.find(namespace, key)
            if found is not None:
                return found
        return self.find_by_permission(text)

    @abstractmethod
    def get_default_pet_keys(self) -> List[PetKeyData]:
        """Built-in pet keys; user entries are merged on top of these."""


class DefaultPetKeyManager(AbstractPetKeyManager):
    """Pet key manager backed by the DefaultPet catalog."""

    def get_default_pet_keys(self) -> List[PetKeyData]:
        return [
            PetKeyData(
                key=pet.meta.item_key.key,
                namespace=pet.meta.item_key.namespace,
                permission=pet.meta.permission,
            )
            for pet in DefaultPet
        ]
