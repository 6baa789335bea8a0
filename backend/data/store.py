"""
Persistent key-value store for aircraft profiles.

Values are JSON-serialized and kept under fixed key names in a single JSON
file. There is no migration: when the stored shape changes, a new key name is
used and the old one is ignored.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from backend.config.constants import ACTIVE_PROFILE_STORE_KEY, PROFILES_STORE_KEY
from backend.core.models import AircraftProfile
from backend.core.profiles import MOONEY_M20J, ProfileState
from common import logger as debug_logger
from common.paths import get_store_file


class KeyValueStore:
    """A tiny string-keyed store backed by a JSON file.

    Each value is a JSON string, mirroring browser local storage.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else get_store_file()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            debug_logger.warning(f"Could not read store '{self.path}': {e}")
            return {}
        if not isinstance(data, dict):
            debug_logger.warning(f"Store '{self.path}' does not hold an object, ignoring it")
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        """Get the raw string stored under a key, or None."""
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Store a raw string under a key.

        Raises:
            OSError: if the store file cannot be written
        """
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)


def load_profile_state(store: KeyValueStore) -> ProfileState:
    """
    Load saved profiles and the active profile id.

    A missing, corrupt or empty profile list falls back to the default
    profile; a missing active id falls back to the default profile's id.
    """
    profiles = (MOONEY_M20J,)

    saved = store.get(PROFILES_STORE_KEY)
    if saved:
        try:
            loaded = tuple(AircraftProfile.from_dict(p) for p in json.loads(saved))
            if loaded:
                profiles = loaded
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            debug_logger.warning(f"Saved profiles are unreadable, using defaults: {e}")

    active_id = store.get(ACTIVE_PROFILE_STORE_KEY) or MOONEY_M20J.id
    return ProfileState(profiles=profiles, active_id=active_id)


def save_profile_state(store: KeyValueStore, state: ProfileState) -> bool:
    """
    Save profiles and the active profile id.

    Returns:
        True if saved, False if the store could not be written
    """
    payload: Any = [p.to_dict() for p in state.profiles]
    try:
        store.set(PROFILES_STORE_KEY, json.dumps(payload))
        store.set(ACTIVE_PROFILE_STORE_KEY, state.active_id)
    except OSError as e:
        debug_logger.error(f"Error saving profiles to '{store.path}': {e}")
        return False
    return True
