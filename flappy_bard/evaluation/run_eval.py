"""
Evaluation Harness
==================

Flies an agent through every seed of the seed bank and reports how far
it got: score, distance, the speed reached and how each run ended
(ground, pipe, or still alive at the step limit).

Usage:
    python -m flappy_bard.evaluation.run_eval --agent agents/baseline_gap
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import sys
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from flappy_bard.bard_core.env_gym import FlappyBardEnv
from flappy_bard.bard_core.rules import REASON_GROUND, REASON_PIPE


DEFAULT_SEED_BANK = Path(__file__).with_name("seed_bank.json")

# Ending recorded for a bird still alive when the step limit hits
OUTCOME_SURVIVED = "max_steps"
OUTCOMES = (REASON_GROUND, REASON_PIPE, OUTCOME_SURVIVED)

ActFn = Callable[[Dict[str, np.ndarray]], int]


@dataclass
class EvalResult:
    """One flight on one seed."""
    seed: int
    final_score: int
    steps: int
    distance: float
    final_speed: float
    termination_reason: str
    elapsed_time: float


@dataclass
class EvalSummary:
    """All flights of one evaluation, with aggregates derived on demand."""
    results: List[EvalResult]
    total_time: float = 0.0

    @property
    def _scores(self) -> np.ndarray:
        return np.array([r.final_score for r in self.results], dtype=np.int64)

    @property
    def mean_score(self) -> float:
        return float(self._scores.mean())

    @property
    def std_score(self) -> float:
        return float(self._scores.std())

    @property
    def min_score(self) -> int:
        return int(self._scores.min())

    @property
    def max_score(self) -> int:
        return int(self._scores.max())

    @property
    def median_score(self) -> float:
        return float(np.median(self._scores))

    @property
    def mean_distance(self) -> float:
        return float(np.mean([r.distance for r in self.results]))

    @property
    def top_speed(self) -> float:
        return float(np.max([r.final_speed for r in self.results]))

    def outcome_counts(self) -> Dict[str, int]:
        """How many flights ended each way, every outcome listed."""
        counts = {outcome: 0 for outcome in OUTCOMES}
        for r in self.results:
            counts[r.termination_reason] = counts.get(r.termination_reason, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, object]:
        return {
            "mean_score": self.mean_score,
            "std_score": self.std_score,
            "min_score": self.min_score,
            "max_score": self.max_score,
            "median_score": self.median_score,
            "mean_distance": self.mean_distance,
            "top_speed": self.top_speed,
            "outcomes": self.outcome_counts(),
            "total_time": self.total_time,
            "results": [asdict(r) for r in self.results],
        }


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """
    Read evaluation seeds from JSON: either a bare list or {"seeds": [...]}.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    bank = Path(path) if path is not None else DEFAULT_SEED_BANK
    if not bank.is_file():
        raise FileNotFoundError(f"Seed bank not found: {bank}")

    data = json.loads(bank.read_text())
    seeds = data["seeds"] if isinstance(data, dict) else data
    return [int(s) for s in seeds]


def _agent_entry_point(module) -> ActFn:
    # Preference order: factory, agent class, bare function
    factory = getattr(module, "create_agent", None)
    agent_cls = getattr(module, "BardAgent", None)

    if factory is not None or agent_cls is not None:
        agent = factory() if factory is not None else agent_cls()
        act = getattr(agent, "act", None)
        if not callable(act):
            raise AttributeError(f"{type(agent).__name__} has no callable 'act'")
        return act

    act = getattr(module, "act", None)
    if callable(act):
        return act

    raise AttributeError(
        f"{module.__file__} exposes none of create_agent(), BardAgent or act()"
    )


def load_agent(agent_path: str) -> ActFn:
    """
    Import an agent from a directory holding agent.py, or from a .py file.

    Returns:
        The agent's act(observation) -> action callable.
    """
    source = Path(agent_path)
    if source.is_dir():
        source = source / "agent.py"
    if not source.is_file():
        raise FileNotFoundError(f"Agent file not found: {source}")

    module_name = f"bard_agent_{source.parent.name}"
    module_spec = importlib.util.spec_from_file_location(module_name, source)
    if module_spec is None or module_spec.loader is None:
        raise ImportError(f"Cannot import agent from {source}")

    module = importlib.util.module_from_spec(module_spec)
    sys.modules[module_name] = module
    module_spec.loader.exec_module(module)

    return _agent_entry_point(module)


def _fly(env: FlappyBardEnv, agent_fn: ActFn, seed: int) -> EvalResult:
    started = time.perf_counter()
    obs, info = env.reset(seed=seed)

    terminated = truncated = False
    while not (terminated or truncated):
        obs, _, terminated, truncated, info = env.step(agent_fn(obs))

    return EvalResult(
        seed=seed,
        final_score=int(info["score"]),
        steps=int(info["steps"]),
        distance=float(info["distance"]),
        final_speed=float(info["travel_speed"]),
        termination_reason=info["terminated_reason"] if terminated else OUTCOME_SURVIVED,
        elapsed_time=time.perf_counter() - started,
    )


def _print_flight(result: EvalResult) -> None:
    print(f"  seed {result.seed:>7}: {result.final_score:>4} pts  "
          f"{result.distance:>9.0f} px  {result.termination_reason}")


def evaluate_single_seed(
    agent_fn: ActFn,
    seed: int,
    max_steps: Optional[int] = None,
    verbose: bool = False
) -> EvalResult:
    """Fly one episode on a fresh environment."""
    env = FlappyBardEnv(max_steps=max_steps)
    try:
        result = _fly(env, agent_fn, seed)
    finally:
        env.close()

    if verbose:
        _print_flight(result)
    return result


def evaluate_agent(
    agent_fn: ActFn,
    seeds: Optional[List[int]] = None,
    max_steps: Optional[int] = None,
    verbose: bool = True
) -> EvalSummary:
    """
    Fly the agent once per seed, reusing a single environment.

    Args:
        agent_fn: Agent's act function (obs) -> action.
        seeds: Seeds to fly. Uses the seed bank if None.
        max_steps: Override the per-episode step limit.
        verbose: If True, print one line per seed and a final report.

    Raises:
        ValueError: If the seed list is empty.
    """
    if seeds is None:
        seeds = load_seed_bank()
    if not seeds:
        raise ValueError("At least one seed is required")

    env = FlappyBardEnv(max_steps=max_steps)
    started = time.perf_counter()
    results: List[EvalResult] = []
    try:
        for seed in seeds:
            result = _fly(env, agent_fn, seed)
            results.append(result)
            if verbose:
                _print_flight(result)
    finally:
        env.close()

    summary = EvalSummary(results=results, total_time=time.perf_counter() - started)
    if verbose:
        print(format_summary(summary))
    return summary


def format_summary(summary: EvalSummary) -> str:
    """Human-readable report block."""
    outcomes = ", ".join(f"{name}={count}" for name, count in summary.outcome_counts().items())
    lines = [
        "",
        f"Flights:        {len(summary.results)}",
        f"Score:          {summary.mean_score:.2f} +/- {summary.std_score:.2f} "
        f"(median {summary.median_score:.1f}, range {summary.min_score}..{summary.max_score})",
        f"Mean distance:  {summary.mean_distance:.0f} px",
        f"Top speed:      {summary.top_speed:.1f} px/s",
        f"Endings:        {outcomes}",
        f"Wall time:      {summary.total_time:.2f}s",
    ]
    return "\n".join(lines)


def save_results(summary: EvalSummary, agent_name: str, output_path: str) -> None:
    """Write the summary and per-seed results as JSON."""
    payload = {"agent": agent_name, "timestamp": time.strftime("%Y-%m-%d %H:%M:%S")}
    payload.update(summary.to_dict())
    Path(output_path).write_text(json.dumps(payload, indent=2))
    print(f"Results saved to {output_path}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate a Flappy Bard agent")
    parser.add_argument("--agent", required=True,
                        help="Agent directory (containing agent.py) or .py file")
    parser.add_argument("--seeds", default=None,
                        help="Seed bank JSON (defaults to the bundled bank)")
    parser.add_argument("--output", default=None, help="Write results JSON here")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="Override the per-episode step limit")
    parser.add_argument("--quiet", action="store_true", help="Only print errors")
    args = parser.parse_args(argv)

    try:
        agent_fn = load_agent(args.agent)
        seeds = load_seed_bank(args.seeds) if args.seeds else None
    except (FileNotFoundError, ImportError, AttributeError) as e:
        print(f"Error: {e}")
        return 1

    summary = evaluate_agent(agent_fn, seeds=seeds, max_steps=args.max_steps,
                             verbose=not args.quiet)

    if args.output:
        save_results(summary, Path(args.agent).stem, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
