"""Work and timing comparison of the pruned search against plain minimax."""
from __future__ import annotations

import math
import statistics as stats
import time
from dataclasses import asdict, dataclass
from typing import Dict, List, Tuple

from .rules import GameState
from .search import SearchStats, evaluate, minimax


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class BenchResult:
    score: int
    pruned_nodes: int
    cutoffs: int
    unpruned_nodes: int
    pruned_mean_s: float
    pruned_ci95_half_s: float
    unpruned_mean_s: float
    unpruned_ci95_half_s: float

    @property
    def node_ratio(self) -> float:
        return self.pruned_nodes / self.unpruned_nodes

    def metrics(self) -> Dict[str, float]:
        out = {k: float(v) for k, v in asdict(self).items()}
        out["node_ratio"] = self.node_ratio
        return out


def run_bench(state: GameState, repeat: int = 3) -> BenchResult:
    if repeat < 1:
        raise ValueError("repeat must be >= 1")
    pruned_times: List[float] = []
    unpruned_times: List[float] = []
    pruned = SearchStats()
    unpruned = SearchStats()
    score = None
    for _ in range(repeat):
        pruned = SearchStats()
        t0 = time.perf_counter()
        result = evaluate(state, pruned)
        t1 = time.perf_counter()
        pruned_times.append(t1 - t0)

        unpruned = SearchStats()
        t2 = time.perf_counter()
        reference = minimax(state, stats=unpruned)
        t3 = time.perf_counter()
        unpruned_times.append(t3 - t2)

        if result.score != reference.score:
            raise RuntimeError(
                f"pruned score {result.score!r} differs from minimax score {reference.score!r}"
            )
        score = result.score
    m_p, h_p = ci95(pruned_times)
    m_u, h_u = ci95(unpruned_times)
    return BenchResult(
        score=int(score),
        pruned_nodes=pruned.nodes,
        cutoffs=pruned.cutoffs,
        unpruned_nodes=unpruned.nodes,
        pruned_mean_s=m_p,
        pruned_ci95_half_s=h_p,
        unpruned_mean_s=m_u,
        unpruned_ci95_half_s=h_u,
    )
