#!/usr/bin/env python3
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from tictactotal.bench import run_bench
from tictactotal.config import load_config
from tictactotal.game_basics import parse_state
from tictactotal.total import parse_state as parse_total_state
from tictactotal.tracking import log_metrics, log_params, maybe_mlflow_run


@dataclass
class Config:
    repeat: int = 5
    tictactoe_boards: tuple = ("000000000", "100000000", "100020000", "110220000")
    total_boards: tuple = ("660113200", "612050000")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    env = load_config()
    cfg = Config()
    lines: List[str] = ["# Benchmarks", "", "| game | board | pruned nodes | minimax nodes | ratio | pruned s | minimax s |", "|---|---|---|---|---|---|---|"]
    cases = [("tictactoe", b, parse_state(b)) for b in cfg.tictactoe_boards]
    cases += [("total", b, TotalState.from_string(b)) for b in cfg.total_boards]
    with maybe_mlflow_run(env.tracking == "mlflow", run_name="benchmarks", log_dir=env.log_dir):
        log_params({"repeat": cfg.repeat})
        for game, board, state in cases:
            res = run_bench(state, repeat=cfg.repeat)
            log_metrics({f"{game}_{board}_{k}": v for k, v in res.metrics().items()})
            logging.info("%s %s ratio=%.3f", game, board, res.node_ratio)
            lines.append(
                f"| {game} | {board} | {res.pruned_nodes} | {res.unpruned_nodes} | "
                f"{res.node_ratio:.3f} | {res.pruned_mean_s:.4f} | {res.unpruned_mean_s:.4f} |"
            )
    out = Path(__file__).resolve().parents[1] / "docs" / "benchmarks.md"
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text("\n".join(lines) + "\n")
    logging.info("Wrote %s", out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
