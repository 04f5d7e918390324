"""
Saving and loading games through an opaque key-value blob store.

Two keys are used: a collection of saved games (most recent first) and a
single transient slot that hands one chosen state to the next session.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError

from engine.errors import MalformedStateError
from engine.game import GameState
from schemas.game_state import parse_game_state, state_to_model
from schemas.saved_game import SavedGame

logger = logging.getLogger(__name__)

SAVES_KEY = "quoridor-saves"
CURRENT_KEY = "quoridor-current"


class BlobStore(Protocol):
    """Minimal key-value contract of the storage collaborator."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryBlobStore:
    """Dict-backed BlobStore for tests and single-process use."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Optional[Any]:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


def _read_saves(store: BlobStore) -> List[Any]:
    saves = store.get(SAVES_KEY)
    if saves is None:
        return []
    if not isinstance(saves, list):
        raise MalformedStateError(f"Saved games under {SAVES_KEY!r} are not a list")
    return saves


def save_game(store: BlobStore, state: GameState) -> SavedGame:
    """
    Save ``state`` at the front of the saves collection.

    Returns:
        The stored record
    """
    record = SavedGame(
        id=uuid.uuid4().hex,
        date=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        state=state_to_model(state),
    )
    saves = _read_saves(store)
    store.set(SAVES_KEY, [record.model_dump(by_alias=True)] + saves)
    logger.info(f"Saved game {record.id}: {state.description}")
    return record


def parse_saved_game(data: Any) -> SavedGame:
    """Validate one raw record from the saves collection."""
    try:
        record = SavedGame.model_validate(data)
    except ValidationError as e:
        raise MalformedStateError(f"Invalid saved game record: {e.error_count()} error(s)") from e
    # Invariant checks beyond the field schema
    parse_game_state(record.state.to_dict())
    return record


def stage_for_loading(store: BlobStore, record: SavedGame) -> None:
    """Put a saved record's state into the transient slot."""
    store.set(CURRENT_KEY, record.state.to_dict())


def take_pending_game(store: BlobStore) -> Optional[GameState]:
    """
    Consume the transient slot.

    The slot is cleared whether or not its content is valid, so a bad record
    cannot be retried forever.

    Raises:
        MalformedStateError: The slot holds an invalid state
    """
    data = store.get(CURRENT_KEY)
    if data is None:
        return None
    store.delete(CURRENT_KEY)
    try:
        return parse_game_state(data)
    except MalformedStateError:
        logger.warning("Refusing to load malformed game from the transient slot")
        raise
