"""
Key-value storage for tic-tac-toe preferences.
A small JSON file standing in for browser local storage.
"""

import json
import logging
import os
import tempfile
from typing import Any, Dict, Optional

from .config import ShellConfig

logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    Flat string-keyed store persisted as one JSON object.

    Every set() writes the whole file atomically (temp file + os.replace).
    A missing, unreadable or corrupt file loads as an empty store; write
    failures are logged and the in-memory values are kept.
    """

    def __init__(self, path: Optional[str] = None):
        """
        Initialize the store.

        Args:
            path: JSON file location. Uses ShellConfig.STORE_PATH if not provided.
        """
        self.path = path or ShellConfig.STORE_PATH
        self._data: Dict[str, Any] = self._load()

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._save()

    def keys(self):
        return list(self._data.keys())

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s (%s); starting empty", self.path, exc)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.path)
            return {}
        return data

    def _save(self) -> None:
        dir_name = os.path.dirname(self.path) or "."
        try:
            os.makedirs(dir_name, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(dir=dir_name, prefix=".tictactoe.", text=True)
        except OSError as exc:
            logger.warning("Could not save %s (%s)", self.path, exc)
            return

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, sort_keys=True)
            os.replace(temp_path, self.path)
        except (OSError, TypeError) as exc:
            logger.warning("Could not save %s (%s)", self.path, exc)
        finally:
            if os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError:
                    pass


def load_preferences(store: KeyValueStore, config: Optional[ShellConfig] = None) -> Dict[str, Any]:
    """Saved session record (scores, mode, first), or {} if none."""
    config = config or ShellConfig()
    record = store.get(config.PREFERENCES_KEY)
    return record if isinstance(record, dict) else {}


def save_preferences(store: KeyValueStore, record: Dict[str, Any], config: Optional[ShellConfig] = None) -> None:
    config = config or ShellConfig()
    store.set(config.PREFERENCES_KEY, record)


def load_theme(store: KeyValueStore, config: Optional[ShellConfig] = None) -> str:
    """Saved theme name; unknown values fall back to the default."""
    config = config or ShellConfig()
    theme = store.get(config.THEME_KEY, config.DEFAULT_THEME)
    return theme if theme in config.THEMES else config.DEFAULT_THEME


def save_theme(store: KeyValueStore, theme: str, config: Optional[ShellConfig] = None) -> None:
    config = config or ShellConfig()
    if theme not in config.THEMES:
        raise ValueError(f"Unknown theme {theme!r}")
    store.set(config.THEME_KEY, theme)
