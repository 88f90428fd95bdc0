from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass
from threading import Lock
from typing import Any, Optional

from ai.agents import create_random_controller
from ai.random_mover import enumerate_movable_pieces
from engine.cells import Side
from engine.game import ClickResult, Game, RuleOptions
from engine.player import PlayerController

from .schemas import AIMoveRequest, ClickRequest, ConfigRequest, ResetRequest
from .serializers import serialize_click, serialize_game

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSettings:
    board_size: int = 8
    red: str = "human"
    black: str = "random"
    seed: Optional[int] = None
    men_capture_backward: bool = False


def _default_player_settings(player_type: str, seed: Optional[int]) -> dict[str, Any]:
    return {"type": player_type, "seed": seed}


def _side_from_label(label: str) -> Side:
    try:
        return Side[label.upper()]
    except KeyError as exc:
        raise ValueError(f"Unsupported side '{label}'.") from exc


class GameSession:
    """Thread-safe orchestrator around a single Game instance.

    A completed human move is answered straight away by the opposing side
    when that side is AI controlled.
    """

    def __init__(self, settings: Optional[SessionSettings] = None) -> None:
        self.settings = settings or SessionSettings()
        self.lock = Lock()
        self.game = Game(
            board_size=self.settings.board_size,
            rules=RuleOptions(men_capture_backward=self.settings.men_capture_backward),
        )
        self.player_settings: dict[Side, dict[str, Any]] = {
            Side.RED: _default_player_settings(self.settings.red, self.settings.seed),
            Side.BLACK: _default_player_settings(self.settings.black, self.settings.seed),
        }
        self._fallback_controllers: dict[Side, PlayerController] = {}
        self._apply_player_controllers()

    # public API ---------------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        with self.lock:
            return self._serialize_locked()

    def reset(self, payload: Optional[ResetRequest] = None) -> dict[str, Any]:
        with self.lock:
            size = payload.size if payload and payload.size else None
            self.game.reset(board_size=size)
            self._apply_player_controllers()
            logger.info("New %dx%d game started.", self.game.board_size, self.game.board_size)
            return self._serialize_locked()

    def configure_players(self, payload: ConfigRequest) -> dict[str, Any]:
        with self.lock:
            config = payload.model_dump(exclude_unset=True)
            if not config:
                return self._serialize_locked()

            for side_label, overrides in config.items():
                side = _side_from_label(side_label)
                merged = deepcopy(self.player_settings[side])
                for key, value in (overrides or {}).items():
                    if value is not None:
                        merged[key] = value
                controller = self._controller_from_settings(side, merged)
                self.player_settings[side] = merged
                self._fallback_controllers.pop(side, None)
                self.game.setPlayer(side, controller)
                logger.info("%s is now played by %s.", side.value, controller.name)

            return self._serialize_locked()

    def click(self, payload: ClickRequest) -> dict[str, Any]:
        with self.lock:
            if self._ai_on_turn_can_move():
                raise ValueError("It is the AI's turn to move.")
            result = self.game.click(payload.col, payload.row)
            ai_moved = False
            ai_passed = False
            if result.completed and self.game.isAITurn() and not self.game.isGameOver():
                ai_moved = self.game.requestAIMove()
                ai_passed = not ai_moved
                if ai_passed:
                    logger.info("%s has no movable pieces and passes.", self.game.current_player.value)
            return self._serialize_click_locked(result, ai_moved, ai_passed)

    def run_ai_move(self, payload: AIMoveRequest) -> dict[str, Any]:
        with self.lock:
            side = self.game.current_player if payload.side is None else _side_from_label(payload.side)
            if side != self.game.current_player:
                raise ValueError("AI move requested for a side that is not on turn.")
            if self.game.isGameOver():
                raise ValueError("The game is over.")
            controller = self.game.getPlayer(side)
            if controller.is_human:
                controller = self._fallback_controller(side)
            if not controller.play(self.game, side):
                raise RuntimeError("AI controller could not complete a move.")
            return self._serialize_locked()

    # helpers ------------------------------------------------------------

    def _serialize_locked(self) -> dict[str, Any]:
        return serialize_game(self.game, self.player_settings)

    def _serialize_click_locked(self, result: ClickResult, ai_moved: bool, ai_passed: bool) -> dict[str, Any]:
        state = self._serialize_locked()
        state["click"] = serialize_click(result)
        state["aiMoved"] = ai_moved
        state["aiPassed"] = ai_passed
        return state

    def _ai_on_turn_can_move(self) -> bool:
        # A stalled AI side leaves the board to the human.
        if self.game.isGameOver() or not self.game.isAITurn():
            return False
        return bool(enumerate_movable_pieces(self.game, self.game.current_player))

    def _fallback_controller(self, side: Side) -> PlayerController:
        """Random controller that plays a human side on request, kept so its seed stream continues."""
        controller = self._fallback_controllers.get(side)
        if controller is None:
            settings = self.player_settings[side]
            controller = create_random_controller(side.value.title(), seed=settings.get("seed"))
            self._fallback_controllers[side] = controller
        return controller

    def _apply_player_controllers(self) -> None:
        for side in (Side.RED, Side.BLACK):
            controller = self._controller_from_settings(side, self.player_settings[side])
            self.game.setPlayer(side, controller)

    def _controller_from_settings(self, side: Side, settings: dict[str, Any]) -> PlayerController:
        label = side.value.title()
        player_type = settings.get("type", "human")
        if player_type == "human":
            return PlayerController.human(f"{label} Human")
        if player_type == "random":
            return create_random_controller(label, seed=settings.get("seed"))
        raise ValueError(f"Player type '{player_type}' not implemented yet.")
