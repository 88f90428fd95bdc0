from __future__ import annotations

import argparse
import logging

import uvicorn

from server.app import create_app
from server.session import SessionSettings


def parse_args() -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Run the Simple Checkers FastAPI backend.")
	parser.add_argument("--host", default="0.0.0.0", help="Bind host for the API server.")
	parser.add_argument("--port", type=int, default=8000, help="Port for the API server.")
	parser.add_argument("--log-level", default="info", help="Log level for the app and uvicorn.")
	parser.add_argument("--board-size", type=int, default=8, help="Cells per board side.")
	parser.add_argument("--red", choices=("human", "random"), default="human", help="Who plays Red.")
	parser.add_argument("--black", choices=("human", "random"), default="random", help="Who plays Black.")
	parser.add_argument("--seed", type=int, default=None, help="Seed for the random opponent.")
	parser.add_argument(
		"--men-capture-backward",
		action="store_true",
		help="Allow men to jump backward as well as forward.",
	)
	return parser.parse_args()


def main() -> None:
	args = parse_args()
	logging.basicConfig(
		level=args.log_level.upper(),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	settings = SessionSettings(
		board_size=args.board_size,
		red=args.red,
		black=args.black,
		seed=args.seed,
		men_capture_backward=args.men_capture_backward,
	)
	uvicorn.run(
		create_app(settings),
		host=args.host,
		port=args.port,
		log_level=args.log_level,
	)


if __name__ == "__main__":
	main()
