from __future__ import annotations

from typing import Any, Optional

from engine.cells import Coordinate, Side
from engine.game import ClickResult, Game, MoveRecord
from engine.player import PlayerController


def _coord_to_dict(coord: Optional[Coordinate]) -> Optional[dict[str, int]]:
    if coord is None:
        return None
    col, row = coord
    return {"col": col, "row": row}


def serialize_move(record: MoveRecord) -> dict[str, Any]:
    return {
        "side": record.side.value,
        "start": _coord_to_dict(record.start),
        "end": _coord_to_dict(record.end),
        "captured": _coord_to_dict(record.captured),
        "isCapture": record.is_capture,
        "promoted": record.promoted,
    }


def serialize_click(result: ClickResult) -> dict[str, Any]:
    return {
        "outcome": result.outcome.value,
        "reason": result.reason.value if result.reason else None,
        "completed": result.completed,
    }


def serialize_controller(controller: PlayerController) -> dict[str, str]:
    return {"kind": controller.kind.value, "name": controller.name}


def serialize_game(game: Game, player_settings: dict[Side, dict[str, Any]]) -> dict[str, Any]:
    size = game.board.boardSize
    cells = [[game.cellAt(col, row).label for col in range(size)] for row in range(size)]

    last_record = game.move_history[-1] if game.move_history else None

    return {
        "boardSize": size,
        "turn": game.current_player.value,
        "status": game.status.value,
        "winner": game.winner.value if game.winner else None,
        "scores": {side.value: game.scoreFor(side) for side in Side},
        "pieceCounts": {
            side.value: {
                "total": game.piecesRemaining(side),
                "kings": sum(1 for _, piece in game.board.getAllPieces(side) if piece.is_king),
            }
            for side in Side
        },
        "cells": cells,
        "selected": _coord_to_dict(game.selectedPiece()),
        "hints": [_coord_to_dict(coord) for coord in game.hintedCells()],
        "moveCount": len(game.move_history),
        "lastMove": serialize_move(last_record) if last_record else None,
        "players": {side.value: serialize_controller(game.getPlayer(side)) for side in Side},
        "playerConfig": {side.value: player_settings[side].copy() for side in Side},
    }
