"""
Local persistence for the idea list and the logged-in user.

Stores are plain key -> string maps. A missing key means "no prior
session" and is never an error.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from creative_assistant.generation.models import Idea

logger = logging.getLogger(__name__)

IDEAS_KEY = "creativeContent"
USER_KEY = "ai-creativity-user"

_IDEA_LIST = TypeAdapter(List[Idea])


class UserProfile(BaseModel):
    """The persisted login."""

    user: str
    email: str


class KeyValueStore(Protocol):
    """Protocol for the local key -> string store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStore:
    """In-process store, used by tests and one-shot runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """
    Directory-backed store with one UTF-8 file per key.

    Args:
        directory: Directory holding the files; created on first write
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable %s: %s", path, e)
            return None

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")
        logger.debug("Saved %s to %s", key, self.directory)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def save_ideas(store: KeyValueStore, ideas: List[Idea]) -> None:
    """Persist the idea list under IDEAS_KEY (camelCase field names)."""
    payload = [idea.model_dump(by_alias=True, mode="json") for idea in ideas]
    store.set(IDEAS_KEY, json.dumps(payload, ensure_ascii=False))


def load_ideas(store: KeyValueStore) -> List[Idea]:
    """
    Restore the idea list.

    Returns:
        Saved ideas, or an empty list when nothing was saved or the
        snapshot cannot be read back
    """
    raw = store.get(IDEAS_KEY)
    if not raw:
        return []
    try:
        return _IDEA_LIST.validate_python(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Ignoring unreadable saved ideas: %s", e)
        return []


def save_user(store: KeyValueStore, profile: UserProfile) -> None:
    store.set(USER_KEY, profile.model_dump_json())


def load_user(store: KeyValueStore) -> Optional[UserProfile]:
    """Restore the logged-in user, or None when absent or unreadable."""
    raw = store.get(USER_KEY)
    if not raw:
        return None
    try:
        return UserProfile.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("Ignoring unreadable saved user: %s", e)
        return None


def clear_user(store: KeyValueStore) -> None:
    store.delete(USER_KEY)
