"""
Persisted game state schema.

Field names match the stored blobs (``currentPlayer``, ``remainingWalls``,
...). Records written before versioning carry no ``schema_version`` and are
read as version 0; they only lack ``moveDescription``.
"""

from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from engine.board import BOARD_SIZE, WALL_GRID_SIZE, WALLS_PER_PLAYER, Player, Position, Wall, WallOrientation
from engine.errors import MalformedStateError
from engine.game import GameState, Phase
from engine.walls import both_players_connected, is_overlapping

SCHEMA_VERSION = 1
LEGACY_SCHEMA_VERSION = 0


class PositionModel(BaseModel):
    """A cell on the board."""
    row: int = Field(ge=0, le=BOARD_SIZE - 1)
    col: int = Field(ge=0, le=BOARD_SIZE - 1)


class WallModel(BaseModel):
    """A wall anchored at its top-left intersection."""
    type: Literal["horizontal", "vertical"]
    row: int = Field(ge=0, le=WALL_GRID_SIZE - 1)
    col: int = Field(ge=0, le=WALL_GRID_SIZE - 1)


class PlayersModel(BaseModel):
    P1: PositionModel
    P2: PositionModel


class RemainingWallsModel(BaseModel):
    P1: int = Field(ge=0, le=WALLS_PER_PLAYER)
    P2: int = Field(ge=0, le=WALLS_PER_PLAYER)


class PersistedGameState(BaseModel):
    """Versioned, serializable form of a GameState."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: int = Field(default=SCHEMA_VERSION)
    players: PlayersModel
    walls: List[WallModel]
    current_player: Literal["P1", "P2"] = Field(alias="currentPlayer")
    remaining_walls: RemainingWallsModel = Field(alias="remainingWalls")
    action_phase: Literal["move", "wall"] = Field(alias="actionPhase")
    move_description: str = Field(default="", alias="moveDescription")

    @model_validator(mode="before")
    @classmethod
    def _migrate(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        version = data.get("schema_version", LEGACY_SCHEMA_VERSION)
        if version == LEGACY_SCHEMA_VERSION:
            data.setdefault("moveDescription", "Loaded game")
            data["schema_version"] = SCHEMA_VERSION
        elif version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported schema version: {version}")
        return data

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


def state_to_model(state: GameState) -> PersistedGameState:
    """Serialize an engine GameState."""
    return PersistedGameState(
        schema_version=SCHEMA_VERSION,
        players=PlayersModel(
            P1=PositionModel(row=state.players[0].row, col=state.players[0].col),
            P2=PositionModel(row=state.players[1].row, col=state.players[1].col),
        ),
        walls=[
            WallModel(type=wall.orientation.value, row=wall.row, col=wall.col)
            for wall in state.sorted_walls()
        ],
        current_player=state.current_player.value,
        remaining_walls=RemainingWallsModel(P1=state.remaining_walls[0], P2=state.remaining_walls[1]),
        action_phase=state.phase.value,
        move_description=state.description,
    )


def model_to_state(model: PersistedGameState) -> GameState:
    """
    Build an engine GameState, rejecting records that break game invariants.

    Raises:
        MalformedStateError: Shared cell, overlapping walls, wall counts that
            disagree with remaining counts, or a player cut off from goal
    """
    p1 = Position(model.players.P1.row, model.players.P1.col)
    p2 = Position(model.players.P2.row, model.players.P2.col)
    if p1 == p2:
        raise MalformedStateError("Both players occupy the same cell")

    walls: List[Wall] = []
    for item in model.walls:
        wall = Wall(WallOrientation(item.type), item.row, item.col)
        if is_overlapping(wall, walls):
            raise MalformedStateError(f"Overlapping wall in record: {wall}")
        walls.append(wall)

    remaining = (model.remaining_walls.P1, model.remaining_walls.P2)
    if len(walls) + sum(remaining) != 2 * WALLS_PER_PLAYER:
        raise MalformedStateError(
            f"{len(walls)} walls placed but {sum(remaining)} remaining; expected {2 * WALLS_PER_PLAYER} in total"
        )

    positions = {Player.P1: p1, Player.P2: p2}
    if not both_players_connected(positions, walls):
        raise MalformedStateError("A player has no path to their goal row")

    return GameState(
        players=(p1, p2),
        walls=frozenset(walls),
        current_player=Player(model.current_player),
        remaining_walls=remaining,
        phase=Phase(model.action_phase),
        description=model.move_description,
    )


def parse_game_state(data: Any) -> GameState:
    """
    Validate a raw stored blob and convert it to a GameState.

    Fails closed: anything that does not match the schema raises
    MalformedStateError instead of producing a partial state.
    """
    try:
        model = PersistedGameState.model_validate(data)
    except ValidationError as e:
        raise MalformedStateError(f"Invalid game state record: {e.error_count()} error(s)") from e
    return model_to_state(model)
