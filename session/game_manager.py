"""
Game manager for handling live Quoridor matches.

Human actions arrive as request models and are answered with MoveResponse.
When a committed turn hands play to the AI-controlled side, an asyncio task
waits the configured think delay, runs the search in the default executor and
commits the result, unless the match was reset or navigated in the meantime.
"""

import asyncio
import logging
import time
import traceback
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from agents.minimax_agent import MinimaxAgent
from engine.board import Player, Position, Wall, WallOrientation
from engine.errors import IllegalActionError, QuoridorError, UnknownNodeError
from engine.game import GameState, QuoridorGame
from schemas.game_config import GameConfig
from schemas.game_state import PositionModel, WallModel, state_to_model
from schemas.move import DeclineWallRequest, MoveRequest, MoveResponse, WallRequest
from schemas.saved_game import SavedGame
from schemas.state_update import GameStateView, HistoryNodeView

from .agent_factory import build_game_agent
from .saves import BlobStore, MemoryBlobStore, save_game, take_pending_game
from .settings import default_agent_config

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Represents an active game session."""
    game_id: str
    game: QuoridorGame
    config: GameConfig
    agent: Optional[MinimaxAgent]
    created_at: float
    last_updated: float
    status: str = "active"  # "active", "completed", "error"
    error_message: Optional[str] = None
    # Bumped by reset and navigation; an AI result from an older generation is dropped
    generation: int = 0
    ai_task: Optional[asyncio.Task] = None

    @property
    def ai_thinking(self) -> bool:
        return self.ai_task is not None and not self.ai_task.done()

    def is_ai_turn(self) -> bool:
        return (
            self.agent is not None
            and not self.game.game_over
            and self.game.get_current_player() is self.agent.player
        )


class GameManager:
    """Manages live Quoridor games."""

    def __init__(self, store: Optional[BlobStore] = None):
        """
        Initialize game manager.

        Args:
            store: Blob store for saved games (in-memory when omitted)
        """
        self.games: Dict[str, GameSession] = {}
        self.store: BlobStore = store if store is not None else MemoryBlobStore()

    def create_game(self, config: Optional[GameConfig] = None, initial_state: Optional[GameState] = None) -> str:
        """
        Create a new game.

        Args:
            config: Game configuration (PvAI with the environment's agent defaults when omitted)
            initial_state: State to start from instead of the standard opening

        Returns:
            Game ID
        """
        config = config or GameConfig(agent=default_agent_config())
        game_id = config.game_id or str(uuid.uuid4())
        if game_id in self.games:
            raise ValueError(f"Game ID already exists: {game_id}")

        now = time.time()
        self.games[game_id] = GameSession(
            game_id=game_id,
            game=QuoridorGame(initial_state),
            config=config,
            agent=build_game_agent(config),
            created_at=now,
            last_updated=now,
        )
        logger.info(f"Game created: {game_id} mode={config.mode.value}")
        return game_id

    def load_pending_game(self, config: Optional[GameConfig] = None) -> Optional[str]:
        """
        Create a game from the store's transient slot, if it holds one.

        Raises:
            MalformedStateError: The slot content failed validation
        """
        state = take_pending_game(self.store)
        if state is None:
            return None
        return self.create_game(config, initial_state=state)

    async def start_game(self, game_id: str) -> None:
        """Schedule the AI if it is to act first."""
        self._maybe_schedule_ai_turn(self._require(game_id))

    def get_game(self, game_id: str) -> Optional[GameSession]:
        """Get game session by ID."""
        return self.games.get(game_id)

    def _require(self, game_id: str) -> GameSession:
        session = self.get_game(game_id)
        if session is None:
            raise KeyError(f"Game not found: {game_id}")
        return session

    def get_game_state(self, game_id: str) -> Optional[GameStateView]:
        session = self.get_game(game_id)
        if not session:
            return None
        return self._create_game_state(session)

    def get_history(self, game_id: str) -> Optional[HistoryNodeView]:
        """History tree of a game as nested views."""
        session = self.get_game(game_id)
        if not session:
            return None
        history = session.game.history

        def build(node_id: str) -> HistoryNodeView:
            node = history.node(node_id)
            return HistoryNodeView(
                id=node.node_id,
                description=node.state.description,
                is_current=node.node_id == history.current_id,
                children=[build(child_id) for child_id in node.children],
            )

        return build(history.root.node_id)

    async def make_move(self, game_id: str, move_request: MoveRequest) -> MoveResponse:
        """Move the requesting player's pawn."""
        destination = Position(move_request.row, move_request.col)
        return await self._process_human_action(
            game_id, move_request.player, lambda game: game.move(destination), "Move successful"
        )

    async def place_wall(self, game_id: str, wall_request: WallRequest) -> MoveResponse:
        """Place a wall for the requesting player and end their turn."""
        wall = Wall(WallOrientation(wall_request.type), wall_request.row, wall_request.col)
        return await self._process_human_action(
            game_id, wall_request.player, lambda game: game.place_wall(wall), "Wall placed"
        )

    async def decline_wall(self, game_id: str, request: DeclineWallRequest) -> MoveResponse:
        """End the requesting player's turn without a wall."""
        return await self._process_human_action(
            game_id, request.player, lambda game: game.decline_wall(), "Turn ended"
        )

    async def _process_human_action(self, game_id: str, player: Player, action, success_message: str) -> MoveResponse:
        session = self.get_game(game_id)
        if not session:
            return MoveResponse(success=False, message="Game not found")

        rejection = self._check_turn(session, player)
        if rejection:
            logger.warning(f"HUMAN ACTION rejected in {game_id}: {rejection}")
            return MoveResponse(success=False, message=rejection, game_state=self._create_game_state(session))

        try:
            state = action(session.game)
        except IllegalActionError as e:
            logger.warning(f"HUMAN ACTION rejected in {game_id} for {player.value}: {e}")
            return MoveResponse(success=False, message=str(e), game_state=self._create_game_state(session))

        session.last_updated = time.time()
        logger.info(f"Player {player.value}: {state.description}")
        self._after_commit(session)
        return MoveResponse(success=True, message=success_message, game_state=self._create_game_state(session))

    def _check_turn(self, session: GameSession, player: Player) -> Optional[str]:
        if session.status == "error":
            return f"Game is in error: {session.error_message}"
        if session.game.game_over:
            return "The game is over"
        if session.ai_thinking:
            return f"Not your turn: the AI is thinking for {session.agent.player.value}"
        if session.agent is not None and player is session.agent.player:
            return f"Not your turn: {player.value} is controlled by the AI"
        if player is not session.game.get_current_player():
            return f"Not your turn: it is {session.game.get_current_player().value}'s turn"
        return None

    def _after_commit(self, session: GameSession) -> None:
        if session.game.game_over:
            session.status = "completed"
            logger.info(f"Game {session.game_id} won by {session.game.winner.value}")
            return
        self._maybe_schedule_ai_turn(session)

    def _maybe_schedule_ai_turn(self, session: GameSession) -> None:
        if not session.is_ai_turn() or session.ai_thinking:
            return
        session.ai_task = asyncio.create_task(self._run_ai_turn(session, session.generation))

    async def _run_ai_turn(self, session: GameSession, generation: int) -> None:
        """
        Search and commit one AI turn.

        The result is applied only if no reset or navigation happened since the
        task was scheduled.
        """
        agent = session.agent
        delay = session.config.agent.think_delay_ms / 1000.0
        try:
            await asyncio.sleep(delay)
            state = session.game.state
            loop = asyncio.get_running_loop()
            successor, stats = await loop.run_in_executor(None, agent.choose_state, state)
        except asyncio.CancelledError:
            logger.info(f"AI turn cancelled in game {session.game_id}")
            raise
        except QuoridorError as e:
            logger.error(f"AI turn failed in game {session.game_id} for {agent.player.value}: {e}")
            session.status = "error"
            session.error_message = str(e)
            return
        except Exception as e:
            logger.error(f"AI TURN ERROR in game {session.game_id} for {agent.player.value}: {e}")
            traceback.print_exc()
            session.status = "error"
            session.error_message = f"AI turn failed: {e}"
            return

        if generation != session.generation:
            logger.info(f"Discarding stale AI result in game {session.game_id}")
            return

        session.game.commit_successor(successor)
        session.last_updated = time.time()
        logger.info(
            f"AI {agent.player.value}: {successor.description} "
            f"(value={stats['value']}, nodes={stats['nodes_visited']}, {stats['time_s']:.4f}s)"
        )
        if session.game.game_over:
            session.status = "completed"
            logger.info(f"Game {session.game_id} won by {session.game.winner.value}")

    def _cancel_ai_turn(self, session: GameSession) -> None:
        session.generation += 1
        if session.ai_thinking:
            session.ai_task.cancel()
        session.ai_task = None

    async def wait_for_ai(self, game_id: str) -> None:
        """Wait until any outstanding AI turn has finished."""
        session = self._require(game_id)
        task = session.ai_task
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def reset_game(self, game_id: str) -> MoveResponse:
        """Start the match over, discarding history and any AI result in flight."""
        session = self.get_game(game_id)
        if not session:
            return MoveResponse(success=False, message="Game not found")
        self._cancel_ai_turn(session)
        session.game.reset()
        session.status = "active"
        session.error_message = None
        session.last_updated = time.time()
        logger.info(f"Game {game_id} reset")
        self._maybe_schedule_ai_turn(session)
        return MoveResponse(success=True, message="Game reset", game_state=self._create_game_state(session))

    async def navigate(self, game_id: str, node_id: str) -> MoveResponse:
        """Continue play from any node of the history tree."""
        session = self.get_game(game_id)
        if not session:
            return MoveResponse(success=False, message="Game not found")
        try:
            node = session.game.history.node(node_id)
        except UnknownNodeError as e:
            return MoveResponse(success=False, message=str(e), game_state=self._create_game_state(session))

        self._cancel_ai_turn(session)
        session.game.navigate(node.node_id)
        session.status = "active"
        session.error_message = None
        session.last_updated = time.time()
        logger.info(f"Game {game_id} navigated to {node_id}: {node.state.description}")
        self._maybe_schedule_ai_turn(session)
        return MoveResponse(success=True, message="Navigated", game_state=self._create_game_state(session))

    def save_game(self, game_id: str) -> SavedGame:
        """Save the live state of a game to the store."""
        return save_game(self.store, self._require(game_id).game.state)

    def _create_game_state(self, session: GameSession) -> GameStateView:
        """Create game state view from session."""
        game = session.game
        return GameStateView(
            game_id=session.game_id,
            state=state_to_model(game.state),
            legal_moves=[PositionModel(row=p.row, col=p.col) for p in game.get_legal_moves()],
            valid_walls=[
                WallModel(type=w.orientation.value, row=w.row, col=w.col) for w in game.get_valid_walls()
            ],
            game_over=game.game_over,
            winner=game.winner,
            ai_thinking=session.ai_thinking,
            current_node_id=game.history.current_id,
            error_message=session.error_message,
        )

    def cleanup_old_games(self, max_age_hours: int = 24) -> int:
        """Clean up old games."""
        current_time = time.time()
        max_age_seconds = max_age_hours * 3600

        games_to_remove = [
            game_id for game_id, session in self.games.items()
            if current_time - session.last_updated > max_age_seconds
        ]
        for game_id in games_to_remove:
            self._cancel_ai_turn(self.games[game_id])
            del self.games[game_id]

        return len(games_to_remove)
