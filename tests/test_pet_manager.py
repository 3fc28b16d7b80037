import os
import shutil
import tempfile

import pytest
import yaml

from fantasypets.pets.catalog import DefaultPet
from fantasypets.pets.keys import PetKeyData
from fantasypets.pets.manager import AbstractPetKeyManager, DefaultPetKeyManager


@pytest.fixture
def data_folder():
    path = tempfile.mkdtemp()
    yield os.path.join(path, "FantasyPets")
    shutil.rmtree(path)


def write_pets(folder, content):
    os.makedirs(folder, exist_ok=True)
    with open(os.path.join(folder, "pets-data.yml"), "w", encoding="utf-8") as f:
        f.write(content)


class TwoPetManager(AbstractPetKeyManager):
    def get_default_pet_keys(self):
        return [
            PetKeyData("am_icon_pet_kitsune", "am_fantasypets_vol1", "mcpets.am_pet_kitsune"),
            PetKeyData("am_icon_beepu", "am_fantasypets_vol5", "mcpets.am_pet_beepu"),
        ]


def test_first_run_writes_defaults(data_folder):
    manager = DefaultPetKeyManager(data_folder)
    path = os.path.join(data_folder, "pets-data.yml")
    assert os.path.exists(path)
    with open(path, encoding="utf-8") as f:
        written = yaml.safe_load(f)
    assert len(written["pets"]) == len(DefaultPet)
    assert written["pets"][0] == {
        "namespace": "am_fantasypets_vol1",
        "key": "am_icon_pet_kitsune",
        "permission": "mcpets.am_pet_kitsune",
    }
    assert len(manager.get_all_pet_keys()) == len(DefaultPet)


def test_written_defaults_load_back_without_duplicates(data_folder):
    DefaultPetKeyManager(data_folder)
    manager = DefaultPetKeyManager(data_folder)
    assert len(manager.get_all_pet_keys()) == len(DefaultPet)


def test_user_entries_are_appended(data_folder):
    write_pets(data_folder, """
pets:
  - namespace: custom
    key: dragon
    permission: mcpets.dragon
  - namespace: custom
    key: slime
""")
    manager = TwoPetManager(data_folder)
    keys = manager.get_all_pet_keys()
    assert len(keys) == 4
    assert keys[2] == PetKeyData("dragon", "custom", "mcpets.dragon")
    # permission is optional
    assert keys[3] == PetKeyData("slime", "custom", "")


def test_entries_missing_namespace_or_key_are_skipped(data_folder):
    write_pets(data_folder, """
pets:
  - key: orphan
  - namespace: custom
  - namespace: custom
    key: ~
  - just a string
  - namespace: custom
    key: ok
""")
    manager = TwoPetManager(data_folder)
    extra = manager.get_all_pet_keys()[2:]
    assert extra == [PetKeyData("ok", "custom", "")]


def test_builtin_wins_over_user_duplicate(data_folder):
    write_pets(data_folder, """
pets:
  - namespace: am_fantasypets_vol1
    key: am_icon_pet_kitsune
    permission: something.else
""")
    manager = TwoPetManager(data_folder)
    matches = [k for k in manager.get_all_pet_keys()
               if (k.namespace, k.key) == ("am_fantasypets_vol1", "am_icon_pet_kitsune")]
    assert matches == [PetKeyData("am_icon_pet_kitsune", "am_fantasypets_vol1",
                                  "mcpets.am_pet_kitsune")]


def test_user_duplicates_collapse_to_first(data_folder):
    write_pets(data_folder, """
pets:
  - {namespace: custom, key: dragon, permission: first}
  - {namespace: custom, key: dragon, permission: second}
""")
    manager = TwoPetManager(data_folder)
    assert manager.find("custom", "dragon").permission == "first"
    assert len(manager.get_all_pet_keys()) == 3


def test_non_string_values_are_stringified(data_folder):
    write_pets(data_folder, "pets:\n  - {namespace: custom, key: 42, permission: 7}\n")
    manager = TwoPetManager(data_folder)
    assert manager.find("custom", "42") == PetKeyData("42", "custom", "7")


def test_get_all_returns_a_copy(data_folder):
    manager = TwoPetManager(data_folder)
    snapshot = manager.get_all_pet_keys()
    snapshot.clear()
    assert len(manager.get_all_pet_keys()) == 2
    manager.load_pet_keys()
    assert len(manager.get_all_pet_keys()) == 2


def test_reload_picks_up_file_changes(data_folder):
    manager = TwoPetManager(data_folder)
    assert len(manager.get_all_pet_keys()) == 2
    write_pets(data_folder, "pets:\n  - {namespace: custom, key: dragon}\n")
    manager.load_pet_keys()
    assert len(manager.get_all_pet_keys()) == 3


def test_unparseable_file_keeps_builtins_and_is_not_overwritten(data_folder):
    write_pets(data_folder, "pets: [unclosed")
    manager = TwoPetManager(data_folder)
    assert len(manager.get_all_pet_keys()) == 2
    with open(os.path.join(data_folder, "pets-data.yml"), encoding="utf-8") as f:
        assert f.read() == "pets: [unclosed"


def test_undecodable_file_keeps_builtins_and_is_not_overwritten(data_folder):
    os.makedirs(data_folder)
    content = b"pets:\n  - namespace: custom\n    key: \xff\xfe\n"
    with open(os.path.join(data_folder, "pets-data.yml"), "wb") as f:
        f.write(content)
    manager = TwoPetManager(data_folder)
    assert len(manager.get_all_pet_keys()) == 2
    with open(os.path.join(data_folder, "pets-data.yml"), "rb") as f:
        assert f.read() == content


def test_unreadable_path_keeps_builtins(data_folder):
    # a directory where the pets file should be
    os.makedirs(os.path.join(data_folder, "pets-data.yml"))
    manager = TwoPetManager(data_folder)
    assert len(manager.get_all_pet_keys()) == 2
    assert os.path.isdir(os.path.join(data_folder, "pets-data.yml"))


def test_pets_not_a_list_is_ignored(data_folder):
    write_pets(data_folder, "pets:\n  namespace: custom\n  key: dragon\n")
    manager = TwoPetManager(data_folder)
    assert len(manager.get_all_pet_keys()) == 2


def test_lookups(data_folder):
    manager = DefaultPetKeyManager(data_folder)
    assert manager.find("am_fantasypets_vol3", "am_icon_pet_quacku").permission == "mcpets.am_pet_quacku"
    assert manager.find("am_fantasypets_vol3", "nope") is None
    assert manager.find_by_permission("MCPETS.AM_PET_SKEL").key == "am_icon_skel"
    assert manager.resolve("am_fantasypets_vol5:am_icon_gemling").key == "am_icon_gemling"
    assert manager.resolve("mcpets.am_pet_rodeer").key == "am_icon_pet_rodeer"
    assert manager.resolve("unknown") is None
