from __future__ import annotations

import logging
import random
from typing import Optional

from engine.cells import Coordinate, Side
from engine.game import Game

logger = logging.getLogger(__name__)


def enumerate_movable_pieces(game: Game, side: Side) -> list[Coordinate]:
	"""Every piece of ``side`` that has at least one slide or jump available."""
	return [
		position
		for position, _piece in game.board.getAllPieces(side)
		if game.hasMoves(*position)
	]


def enumerate_hinted_destinations(game: Game) -> list[Coordinate]:
	return game.hintedCells()


def choose_random_move(game: Game, side: Side, rng: Optional[random.Random] = None) -> bool:
	"""Play a uniformly random legal move for ``side`` through the click interface.

	The piece is picked first, then one of the destinations painted for it.
	Returns True when a move was completed. A side without movable pieces
	passes and the board is left untouched.
	"""
	rng = rng or random.Random()

	movable = enumerate_movable_pieces(game, side)
	if not movable:
		logger.debug("%s has no movable pieces, passing.", side.value)
		return False

	piece = rng.choice(movable)
	game.handleClick(*piece)

	destinations = enumerate_hinted_destinations(game)
	if not destinations:
		# Put the piece back down rather than leave it selected.
		if game.cellAt(*piece).selected:
			game.handleClick(*piece)
		return False

	target = rng.choice(destinations)
	return game.handleClick(*target)
