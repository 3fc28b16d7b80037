# fantasypets/pets/catalog.py

from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import List, Optional

from fantasypets.pets.keys import NamespacedKey


class PetVolume(IntEnum):
    """ the fantasy pet packs; each one ships its items under its own
    namespace."""
    VOL1 = 1
    VOL2 = 2
    VOL3 = 3
    VOL4 = 4
    VOL5 = 5

    @property
    def namespace(self) -> str:
        return f"am_fantasypets_vol{self.value}"

    def item_key(self, pet_id: str) -> str:
        # Vol.5 dropped the "pet_" infix from its icon names
        if self is PetVolume.VOL5:
            return f"am_icon_{pet_id}"
        return f"am_icon_pet_{pet_id}"


@dataclass(frozen=True)
class PetMeta:
    item_key: NamespacedKey
    permission: str


def derive_meta(volume, pet_id: str) -> PetMeta:
    volume = PetVolume(volume)
    return PetMeta(
        item_key=NamespacedKey(volume.namespace, volume.item_key(pet_id)),
        permission=f"mcpets.am_pet_{pet_id}",
    )


class DefaultPet(Enum):
    """Built-in adoptable pets, in catalog order (Vol.1 through Vol.5)."""

    # Vol.1
    KITSUNE = ("kitsune", PetVolume.VOL1)
    OWLBEAR = ("owlbear", PetVolume.VOL1)
    SHADOWBEAK = ("shadowbeak", PetVolume.VOL1)

    # Vol.2
    DIGGLER = ("diggler", PetVolume.VOL2)
    FAELI = ("faeli", PetVolume.VOL2)
    SNIFFLER = ("sniffler", PetVolume.VOL2)

    # Vol.3
    LEAFLING = ("leafling", PetVolume.VOL3)
    QUACKU = ("quacku", PetVolume.VOL3)
    RODEER = ("rodeer", PetVolume.VOL3)

    # Vol.4
    OTTERLY = ("otterly", PetVolume.VOL4)
    EMBERNA = ("emberna", PetVolume.VOL4)
    HAMTERA = ("hamtera", PetVolume.VOL4)

    # Vol.5
    BEEPU = ("beepu", PetVolume.VOL5)
    GEMLING = ("gemling", PetVolume.VOL5)
    SKEL = ("skel", PetVolume.VOL5)

    def __init__(self, pet_id: str, volume: PetVolume):
        self.id = pet_id
        self.volume = volume

    @property
    def meta(self) -> PetMeta:
        return _META[self]

    def namespaced(self) -> NamespacedKey:
        return self.meta.item_key

    def has_permission_node(self, node: str) -> bool:
        return self.meta.permission.lower() == node.lower()

    @classmethod
    def from_permission(cls, permission: str) -> Optional["DefaultPet"]:
        for pet in cls:
            if pet.has_permission_node(permission):
                return pet
        return None

    @classmethod
    def from_item_key(cls, item_key: NamespacedKey) -> Optional["DefaultPet"]:
        for pet in cls:
            if pet.meta.item_key == item_key:
                return pet
        return None

    @classmethod
    def from_parts(cls, namespace: str, key: str) -> Optional["DefaultPet"]:
        """Like from_item_key, for raw strings that may not be valid keys."""
        for pet in cls:
            item_key = pet.meta.item_key
            if item_key.namespace == namespace and item_key.key == key:
                return pet
        return None

    @classmethod
    def by_volume(cls, volume) -> List["DefaultPet"]:
        return [pet for pet in cls if pet.volume == volume]


_META = MappingProxyType({pet: derive_meta(pet.volume, pet.id) for pet in DefaultPet})
