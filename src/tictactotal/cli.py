from __future__ import annotations

import argparse
import csv
import logging
import sys
from typing import Optional

from .bench import run_bench
from .config import GAMES, TRACKING_BACKENDS, Config, load_config
from .errors import InvalidInput
from .game_basics import TicTacToeState, empty_board, parse_state
from .rules import GameState, successor
from .search import choose, evaluate
from .tactics import immediate_wins
from .total import TotalState
from .total import parse_state as parse_total_state
from .tracking import log_metrics, log_params, maybe_mlflow_run


def _game_options(parser: argparse.ArgumentParser, default) -> None:
    parser.add_argument(
        "--game",
        choices=GAMES,
        default=default,
        help="Rule set (default: $T3_GAME or tictactoe)",
    )
    parser.add_argument(
        "--turn",
        choices=["odd", "even"],
        default=default,
        help="Tic-Tac-Total side to move (default: inferred, odd moves first)",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="t3", description="Exact alpha-beta player for tic-tac-toe and Tic-Tac-Total")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    _game_options(p, None)
    # accepted after the subcommand too; unset values keep the top-level ones
    common = argparse.ArgumentParser(add_help=False)
    _game_options(common, argparse.SUPPRESS)
    sub = p.add_subparsers(dest="cmd")

    board_help = "Board string, row-major digits (tictactoe: 0=empty,1=X,2=O; total: 0=empty,1-6)"

    p_choose = sub.add_parser("choose", parents=[common], help="Print the optimal action for the side to move")
    p_choose.add_argument("--board", required=True, help=board_help)

    p_sol = sub.add_parser("solve", parents=[common], help="Score a board for the side to move and show the best action")
    p_sol.add_argument("--board", help=board_help + " (omit with --stdin)")
    p_sol.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_tac = sub.add_parser("tactics", parents=[common], help="List immediate wins for the side to move")
    p_tac.add_argument("--board", required=True, help=board_help)

    p_play = sub.add_parser("play", parents=[common], help="Self-play from a board until the game ends")
    p_play.add_argument("--board", help=board_help + " (default: empty board)")

    p_bench = sub.add_parser("bench", parents=[common], help="Compare pruned search against plain minimax")
    p_bench.add_argument("--board", required=True, help=board_help)
    p_bench.add_argument("--repeat", type=int, default=3, help="Timing repetitions (default: 3)")
    p_bench.add_argument(
        "--tracking",
        choices=TRACKING_BACKENDS,
        default=None,
        help="Experiment tracking backend (default: $T3_TRACKING or none)",
    )

    return p


def _load_state(raw: Optional[str], game: str, turn: Optional[str], cfg: Config) -> GameState:
    if game == "total":
        odd_turn = None if turn is None else turn == "odd"
        return parse_total_state("0" * 9 if raw is None else raw, odd_turn)
    if raw is None:
        return empty_board(cfg.board_size)
    return parse_state(raw)


def _serialize(state: GameState) -> str:
    if isinstance(state, (TicTacToeState, TotalState)):
        return state.serialize()
    return repr(state)


def _play(state: GameState) -> int:
    plies = 0
    while not state.is_terminal():
        action = choose(state)
        state = successor(state, action)
        plies += 1
        logging.info("ply=%d action=%s board=%s", plies, action, _serialize(state))
    if state.is_tie():
        logging.info("result=tie plies=%d", plies)
    else:
        # the player who made the last move won; plies counts from the starting board
        logging.info("result=win winner=%s plies=%d", "first" if plies % 2 == 1 else "second", plies)
    return 0


def _solve_stdin(game: str, turn: Optional[str], cfg: Config) -> int:
    w = csv.writer(sys.stdout)
    w.writerow(["board", "score", "col", "row", "move"])
    for line in sys.stdin:
        raw = line.strip()
        if not raw:
            continue
        try:
            state = _load_state(raw, game, turn, cfg)
        except ValueError:
            logging.debug("skipping invalid board %r", raw)
            continue
        res = evaluate(state)
        a = res.action
        w.writerow([
            raw,
            int(res.score),
            "" if a is None else a.col,
            "" if a is None else a.row,
            "" if a is None else a.move,
        ])
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("tictactotal"))
        except PackageNotFoundError:
            print("unknown")
        return 0

    try:
        cfg = load_config()
    except ValueError as e:
        logging.error("%s", e)
        return 2
    game = ns.game or cfg.game

    if ns.cmd is None:
        parser.print_help()
        return 0

    if ns.cmd == "solve" and ns.stdin:
        return _solve_stdin(game, ns.turn, cfg)

    try:
        state = _load_state(getattr(ns, "board", None), game, ns.turn, cfg)
    except ValueError as e:
        logging.error("%s", e)
        return 2

    if ns.cmd == "choose":
        try:
            action = choose(state)
        except InvalidInput as e:
            logging.error("%s", e)
            return 2
        logging.info("action=%s", action)
        return 0

    if ns.cmd == "solve":
        res = evaluate(state)
        logging.info("score=%s action=%s", res.score.name, res.action)
        return 0

    if ns.cmd == "tactics":
        logging.info("wins=%s", [str(a) for a in immediate_wins(state)])
        return 0

    if ns.cmd == "play":
        return _play(state)

    if ns.cmd == "bench":
        tracking = ns.tracking or cfg.tracking
        try:
            with maybe_mlflow_run(tracking == "mlflow", run_name="bench", log_dir=cfg.log_dir):
                log_params({"game": game, "board": _serialize(state), "repeat": ns.repeat})
                res = run_bench(state, repeat=ns.repeat)
                log_metrics(res.metrics())
        except ValueError as e:
            logging.error("%s", e)
            return 2
        logging.info(
            "score=%d pruned_nodes=%d unpruned_nodes=%d cutoffs=%d ratio=%.3f pruned=%.4fs unpruned=%.4fs",
            res.score,
            res.pruned_nodes,
            res.unpruned_nodes,
            res.cutoffs,
            res.node_ratio,
            res.pruned_mean_s,
            res.unpruned_mean_s,
        )
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
