# fantasypets/pets/keys.py

import re
from dataclasses import dataclass
from typing import Dict

DEFAULT_NAMESPACE = "minecraft"

_NAMESPACE_RE = re.compile(r"^[a-z0-9._-]+$")
_KEY_RE = re.compile(r"^[a-z0-9/._-]+$")


@dataclass(frozen=True)
class NamespacedKey:
    """Two-part identifier (namespace:key) naming a game item or resource."""
    namespace: str
    key: str

    def __post_init__(self):
        if not _NAMESPACE_RE.match(self.namespace or ""):
            raise ValueError(f"Invalid namespace: {self.namespace!r}")
        if not _KEY_RE.match(self.key or ""):
            raise ValueError(f"Invalid key: {self.key!r}")

    @classmethod
    def from_string(cls, text: str) -> "NamespacedKey":
        """Parse "namespace:key"; a bare key lands in the minecraft namespace."""
        if ":" in text:
            namespace, key = text.split(":", 1)
        else:
            namespace, key = DEFAULT_NAMESPACE, text
        return cls(namespace.lower(), key.lower())

    def __str__(self) -> str:
        return f"{self.namespace}:{self.key}"


@dataclass(frozen=True)
class PetKeyData:
    """A pet item key together with the permission node that unlocks it."""
    key: str
    namespace: str
    permission: str = ""

    def to_namespaced_key(self) -> NamespacedKey:
        return NamespacedKey(self.namespace, self.key)

    def to_dict(self) -> Dict[str, str]:
        return {
            "namespace": self.namespace,
            "key": self.key,
            "permission": self.permission,
        }

    def __str__(self) -> str:
        return f"{self.namespace}:{self.key}"
