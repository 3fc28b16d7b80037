import os
import yaml
import copy
import logging

log = logging.getLogger(__name__)
log.setLevel(logging.INFO)

ENV_PREFIX = "FANTASYPETS_"


class Config:
    _instance = None
    _initialized = False

    _defaults = {
        "plugin": {
            "name": "FantasyPets",
            "data_folder": "plugins/FantasyPets",
            "pets_file": "pets-data.yml",
        },
        "messages": {
            "unknown_command": "Unknown command.",
            "no_permission": "You do not have permission to use this command.",
            "admin_only": "You do not have permission to use this command.",
            "command_error": "An internal error occurred while running this command.",
        },
        "logging": {
            "log_level": "INFO",
            "log_file_path": "fantasypets.log",
        }
    }

    # commands are registered under the plugin name, so it can't move
    # while they are installed
    _reboot_only_keys = {
        "plugin.name",
    }

    def __new__(cls, path="config.yaml"):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, path="config.yaml"):
        if self.__class__._initialized:
            return
        self._path = path
        self._load()
        self.__class__._initialized = True

    def _read_file(self):
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except FileNotFoundError:
            log.warning(f"Failed to open config file {self._path}, reverting to defaults")
            return {}

    def _load(self):
        raw = self._read_file()
        raw = self._deep_merge(copy.deepcopy(self._defaults), raw)
        raw = self._apply_env_overrides(raw)
        self._validate(raw)

        self._raw = raw
        self._assign(raw)

        self._reboot_snapshot = {
            key: self._get_nested(raw, key.split("."))
            for key in self._reboot_only_keys
        }

    def reload(self):
        new_raw = self._read_file()
        new_raw = self._deep_merge(copy.deepcopy(self._defaults), new_raw)
        new_raw = self._apply_env_overrides(new_raw)
        self._validate(new_raw)

        for key, old_val in self._reboot_snapshot.items():
            new_val = self._get_nested(new_raw, key.split("."))
            if new_val != old_val:
                raise RuntimeError(
                    f"Cannot change reboot-only config key '{key}' at runtime")

        self._raw = new_raw
        self._assign(new_raw)

    def _assign(self, raw):
        self.plugin = raw["plugin"]
        self.messages = raw["messages"]
        self.logging = raw["logging"]

    @property
    def pets_path(self):
        return os.path.join(self.plugin["data_folder"], self.plugin["pets_file"])

    def _apply_env_overrides(self, raw):
        overrides = {}
        for key, val in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            path = key[len(ENV_PREFIX):].lower().split("__")
            self._set_nested(overrides, path, self._coerce(val))
        return self._deep_merge(raw, overrides)

    def _set_nested(self, d, path, value):
        for key in path[:-1]:
            d = d.setdefault(key, {})
        d[path[-1]] = value

    def _get_nested(self, d, path):
        for key in path:
            d = d.get(key, {})
        return d if not isinstance(d, dict) else copy.deepcopy(d)

    def _coerce(self, val):
        if val.lower() in ("true", "false"):
            return val.lower() == "true"
        if val.isdigit():
            return int(val)
        try:
            return float(val)
        except ValueError:
            return val

    def _deep_merge(self, base, extra):
        merged = dict(base)
        for k, v in extra.items():
            if isinstance(v, dict) and isinstance(merged.get(k), dict):
                merged[k] = self._deep_merge(merged[k], v)
            else:
                merged[k] = v
        return merged

    def _validate(self, cfg):
        assert cfg["plugin"]["name"], "plugin.name is required"
        assert isinstance(cfg["plugin"]["name"], str), "plugin.name must be a string"
        assert cfg["plugin"]["data_folder"], "plugin.data_folder is required"
        assert cfg["plugin"]["pets_file"], "plugin.pets_file is required"
        for key in ("unknown_command", "no_permission", "admin_only", "command_error"):
            assert isinstance(cfg["messages"][key], str), f"messages.{key} must be a string"
