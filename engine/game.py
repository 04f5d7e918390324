"""
Quoridor game state and turn state machine.

A turn has two phases. In the MOVE phase the player to act moves their pawn;
a move into the goal row wins immediately. Otherwise the turn enters the WALL
phase, where the same player places one wall or declines, which hands the
turn to the opponent.

All transition functions are pure: they return a new GameState and never
mutate their input. ``QuoridorGame`` holds the live state of one match and
records completed turns in the history tree.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from .board import WALLS_PER_PLAYER, Board, Player, Position, Wall
from .errors import IllegalActionError
from .history import GameHistoryTree
from .move_generator import get_legal_moves
from .walls import check_wall_placement, valid_wall_placements

logger = logging.getLogger(__name__)


class Phase(Enum):
    MOVE = "move"
    WALL = "wall"


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of a match.

    Equality covers positions, walls (as a set), player to act, remaining
    wall counts and phase. The description and recorded winner are
    informational and do not take part.
    """
    players: Tuple[Position, Position]
    walls: FrozenSet[Wall]
    current_player: Player
    remaining_walls: Tuple[int, int]
    phase: Phase = Phase.MOVE
    description: str = field(default="", compare=False)
    winner: Optional[Player] = field(default=None, compare=False)

    def position(self, player: Player) -> Position:
        return self.players[player.index]

    @property
    def positions(self) -> Dict[Player, Position]:
        return {Player.P1: self.players[0], Player.P2: self.players[1]}

    def walls_left(self, player: Player) -> int:
        return self.remaining_walls[player.index]

    @cached_property
    def board(self) -> Board:
        return Board(self.walls)

    @property
    def is_terminal(self) -> bool:
        return self.winner is not None

    def sorted_walls(self) -> List[Wall]:
        return sorted(self.walls, key=Wall.sort_key)


@dataclass(frozen=True)
class PawnMove:
    destination: Position


@dataclass(frozen=True)
class WallPlacement:
    wall: Wall


@dataclass(frozen=True)
class DeclineWall:
    pass


Action = Union[PawnMove, WallPlacement, DeclineWall]


def initial_state() -> GameState:
    """Both pawns on their start cells, no walls, P1 to move."""
    return GameState(
        players=(Player.P1.start_position, Player.P2.start_position),
        walls=frozenset(),
        current_player=Player.P1,
        remaining_walls=(WALLS_PER_PLAYER, WALLS_PER_PLAYER),
        phase=Phase.MOVE,
        description="Initial state",
    )


def is_winning_row(player: Player, row: int) -> bool:
    return row == player.goal_row


def _replace_player(values: tuple, player: Player, value) -> tuple:
    items = list(values)
    items[player.index] = value
    return tuple(items)


def move_pawn(state: GameState, destination: Position) -> GameState:
    """
    Move the current player's pawn.

    Raises:
        IllegalActionError: Wrong phase, or destination not a legal move
    """
    if state.phase is not Phase.MOVE:
        raise IllegalActionError("A pawn move is not allowed during the wall phase")
    if destination not in get_legal_moves(state):
        raise IllegalActionError(f"Illegal move to {destination}")

    mover = state.current_player
    players = _replace_player(state.players, mover, destination)
    if is_winning_row(mover, destination.row):
        return dataclasses.replace(
            state,
            players=players,
            phase=Phase.MOVE,
            description=f"{mover.value} won the game!",
            winner=mover,
        )
    return dataclasses.replace(
        state,
        players=players,
        phase=Phase.WALL,
        description=f"{mover.value} moved to {destination}",
        winner=None,
    )


def place_wall(state: GameState, wall: Wall) -> GameState:
    """
    Place a wall for the current player and pass the turn.

    Raises:
        IllegalActionError: Wrong phase or no walls left
        WallOverlapError: Wall out of bounds or overlapping
        PathBlockedError: Wall would close a player's last path
    """
    if state.phase is not Phase.WALL:
        raise IllegalActionError("Walls can only be placed after moving")
    mover = state.current_player
    if state.walls_left(mover) <= 0:
        raise IllegalActionError(f"{mover.value} has no walls left")
    check_wall_placement(wall, state.positions, state.walls)
    return with_validated_wall(state, wall)


def with_validated_wall(state: GameState, wall: Wall) -> GameState:
    """
    Finish the turn with ``wall`` placed, skipping legality checks.

    Only for walls already taken from ``valid_wall_placements`` for this
    state's positions and walls.
    """
    mover = state.current_player
    return GameState(
        players=state.players,
        walls=state.walls | {wall},
        current_player=mover.opponent,
        remaining_walls=_replace_player(state.remaining_walls, mover, state.walls_left(mover) - 1),
        phase=Phase.MOVE,
        description=f"{mover.value} moved to {state.position(mover)} and placed {wall}",
    )


def decline_wall(state: GameState) -> GameState:
    """Skip the wall sub-turn and pass the turn."""
    if state.phase is not Phase.WALL:
        raise IllegalActionError("There is no pending move to finish")
    mover = state.current_player
    return dataclasses.replace(
        state,
        current_player=mover.opponent,
        phase=Phase.MOVE,
        description=f"{mover.value} moved to {state.position(mover)}",
        winner=None,
    )


def apply_action(state: GameState, action: Action) -> GameState:
    """Dispatch an action value to its transition function."""
    if isinstance(action, PawnMove):
        return move_pawn(state, action.destination)
    if isinstance(action, WallPlacement):
        return place_wall(state, action.wall)
    if isinstance(action, DeclineWall):
        return decline_wall(state)
    raise TypeError(f"Unknown action: {action!r}")


class QuoridorGame:
    """
    One match: the live state plus its history tree.

    The live state may be mid-turn (WALL phase, pending move). Only states
    that end a turn, or win the game, are committed to history.
    """

    def __init__(self, start: Optional[GameState] = None):
        self._begin(start or initial_state())

    def _begin(self, state: GameState) -> None:
        self.state = state
        self.history = GameHistoryTree(state)
        self.game_over = False
        self.winner: Optional[Player] = None

    def reset(self) -> None:
        """Discard the history and return to the standard opening, even for a loaded game."""
        self._begin(initial_state())

    def get_current_player(self) -> Player:
        return self.state.current_player

    def get_legal_moves(self) -> List[Position]:
        if self.game_over or self.state.phase is not Phase.MOVE:
            return []
        return get_legal_moves(self.state)

    def get_valid_walls(self) -> List[Wall]:
        state = self.state
        if self.game_over or state.phase is not Phase.WALL or state.walls_left(state.current_player) <= 0:
            return []
        return valid_wall_placements(state.positions, state.walls)

    def apply(self, action: Action) -> GameState:
        """
        Apply a human action to the live state.

        Raises an IllegalActionError subclass and leaves everything unchanged
        when the action is not legal.
        """
        if self.game_over:
            raise IllegalActionError("The game is over")
        new_state = apply_action(self.state, action)
        if new_state.phase is Phase.WALL:
            # Pending move, not committed until the wall sub-turn resolves
            self.state = new_state
        else:
            self._commit(new_state)
        return new_state

    def move(self, destination: Position) -> GameState:
        return self.apply(PawnMove(destination))

    def place_wall(self, wall: Wall) -> GameState:
        return self.apply(WallPlacement(wall))

    def decline_wall(self) -> GameState:
        return self.apply(DeclineWall())

    def commit_successor(self, state: GameState) -> GameState:
        """Commit a complete turn chosen elsewhere, e.g. by a search agent."""
        if self.game_over:
            raise IllegalActionError("The game is over")
        if self.state.phase is not Phase.MOVE:
            raise IllegalActionError("Cannot commit a turn while a move is pending")
        if state.current_player is not self.state.current_player.opponent and state.winner is None:
            raise IllegalActionError("Successor must end the current player's turn")
        self._commit(state)
        return state

    def _commit(self, state: GameState) -> None:
        self.state = state
        node_id = self.history.append(state)
        logger.debug(f"Committed node {node_id}: {state.description}")
        if state.winner is not None:
            self.game_over = True
            self.winner = state.winner
            logger.info(f"{state.winner.value} reached the goal row")

    def navigate(self, node_id: str) -> GameState:
        """
        Jump to any node in the history tree and continue play from there.

        The game-over flag is cleared, as is the winner recorded in the state.
        """
        state = self.history.navigate(node_id)
        self.state = dataclasses.replace(state, winner=None)
        self.game_over = False
        self.winner = None
        return self.state
