"""
Experiment runner: exhaustively validates the decision trees from a YAML config.

Usage (from repo root):
    python -m sortfive.bench.runner experiments/configs/exhaustive_5.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per sort (input, output, counts, failures)
    - summary.csv             # per (mode, strategy): sorts, avg comparisons/swaps, failures
    - histogram.csv           # per (mode, strategy): comparison count -> frequency
    - (console) rich/tqdm summaries, plus input/output dumps for any failing sort

Design notes:
- Every strategy sees the same 120 arrangements of `base_values`.
- An optional `sampled` section adds randomized inputs (ties included) drawn
  from a seeded NumPy RNG.
- A failing sort never stops the run; the process exits 1 if any failed.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from sortfive.bench.harness import AggregateStats, enumerate_and_validate, sample_and_validate
from sortfive.network import COMPARISON_BOUND, Strategy, resolve_strategy
from sortfive.validate import Failure, Outcome, check_bound

_console = Console()

_SUMMARY_COLUMNS = [
    "mode",
    "strategy",
    "sorts",
    "avg_comparisons",
    "min_comparisons",
    "max_comparisons",
    "avg_swaps",
    "median_ns",
    "failures",
]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class RunResult:
    run_dir: Path
    stats: List[AggregateStats]

    @property
    def ok(self) -> bool:
        return all(s.ok for s in self.stats)


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    # Same-second reruns get a numeric suffix instead of clobbering
    suffix = 1
    while run_dir.exists():
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
        suffix += 1
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode("utf-8").strip()
    except (OSError, subprocess.CalledProcessError):
        return None


def _gather_meta() -> Dict[str, Any]:
    import platform
    meta = {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }
    return meta


def _resolve_strategies(cfg_strategies: Sequence[Any]) -> List[Strategy]:
    if not isinstance(cfg_strategies, (list, tuple)) or not cfg_strategies:
        raise ValueError("Config 'strategies' must be a non-empty list of strategy names")
    out: List[Strategy] = []
    for name in cfg_strategies:
        strat = resolve_strategy(name)
        if strat in out:
            raise ValueError(f"Duplicate strategy in config: {strat.value}")
        out.append(strat)
    return out


def _parse_sampled(cfg: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    sampled = cfg.get("sampled", None)
    if sampled is None:
        return None
    if not isinstance(sampled, dict):
        raise ValueError("Config 'sampled' must be a mapping if provided")
    missing = [k for k in ("seed", "count", "dataset") if k not in sampled]
    if missing:
        raise ValueError(f"Missing required 'sampled' keys: {missing}")
    return sampled


# ------------------------- helpers: summaries ------------------------- #

def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if df.empty:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)

    df["failed"] = ~df["ok"].astype(bool)
    out = (
        df.groupby(["mode", "strategy"], as_index=False)
        .agg(
            sorts=("comparisons", "count"),
            avg_comparisons=("comparisons", "mean"),
            min_comparisons=("comparisons", "min"),
            max_comparisons=("comparisons", "max"),
            avg_swaps=("swaps", "mean"),
            median_ns=("elapsed_ns", "median"),
            failures=("failed", "sum"),
        )
    )
    out["median_ns"] = out["median_ns"].astype("int64")
    out["failures"] = out["failures"].astype("int64")
    return out[_SUMMARY_COLUMNS].sort_values(["mode", "strategy"], ignore_index=True)


def _histogram_frame(labelled: List[tuple]) -> pd.DataFrame:
    rows = [
        {"mode": mode, "strategy": s.strategy, "comparisons": c, "count": n}
        for mode, s in labelled
        for c, n in sorted(s.histogram.nonzero().items())
    ]
    return pd.DataFrame(rows, columns=["mode", "strategy", "comparisons", "count"])


def _format_array(xs: Sequence[Any]) -> str:
    return "[ " + ", ".join(f"{x!s:>2}" for x in xs) + "]"


def _print_failures(mode: str, failures: List[Failure]) -> None:
    for f in failures:
        _console.print(f"\n[bold red]SORT FAILED[/bold red] ({mode}, {f.kind.value}): {f.detail}")
        _console.print(f"INPUT ARRAY  -> {_format_array(f.original)}")
        _console.print(f"OUTPUT ARRAY -> {_format_array(f.result)}")


def _print_rich_summary(labelled: List[tuple], bound: int) -> None:
    table = Table(title="Comparison count histogram")
    table.add_column("Comparisons", justify="right", style="bold")
    for mode, s in labelled:
        table.add_column(f"{s.strategy}\n({mode})", justify="right")

    populated = sorted({c for _, s in labelled for c in s.histogram.nonzero()})
    for c in populated:
        label = f"{c}" if c <= bound else f"[red]{c}[/red]"
        table.add_row(label, *[str(s.histogram.counts[c]) for _, s in labelled])

    _console.print()
    _console.print(table)
    _console.print()
    for mode, s in labelled:
        status = "[green]ok[/green]" if s.ok else f"[red]{len(s.failures)} failed[/red]"
        _console.print(
            f"{s.strategy:>22s} ({mode}):  num_sorts = {s.sorts:7d},  "
            f"avg. comps = {s.avg_comparisons:7.3f},  avg. swaps = {s.avg_swaps:7.3f}  {status}"
        )
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> RunResult:
    cfg = _load_yaml(config_path)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a mapping: {config_path}")

    # Required keys & basic validation
    required = ["experiment_name", "output_dir", "base_values", "strategies"]
    missing = [k for k in required if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name: str = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    base_values: List[Any] = list(cfg["base_values"])
    bound: int = int(cfg.get("bound", COMPARISON_BOUND))
    check_bound(bound)
    strategies = _resolve_strategies(cfg["strategies"])
    sampled = _parse_sampled(cfg)

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    histogram_path = run_dir / "histogram.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    # Persist resolved config early
    _write_yaml({**cfg, "bound": bound, "strategies": [s.value for s in strategies]}, cfg_resolved_path)

    meta = _gather_meta()
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Strategies:[/bold] {', '.join(s.value for s in strategies)}")
    _console.print(f"[bold]Base values:[/bold] {_format_array(base_values)}  (bound {bound})")

    def _writer(mode: str):
        def on_sort(record: Dict[str, Any], outcome: Outcome) -> None:
            _append_jsonl(
                {
                    "mode": mode,
                    **record,
                    "ok": outcome.ok,
                    "failures": [k.value for k in outcome.kinds],
                },
                results_path,
            )
        return on_sort

    labelled: List[tuple] = []
    for strat in tqdm(strategies, desc="Strategies", unit="tree"):
        stats = enumerate_and_validate(
            base_values, strategy=strat, bound=bound, on_sort=_writer("exhaustive")
        )
        labelled.append(("exhaustive", stats))

        if sampled is not None:
            # Same seed per strategy so every tree sees identical samples
            rng = np.random.default_rng(int(sampled["seed"]))
            stats = sample_and_validate(
                dict(sampled["dataset"]),
                rng,
                int(sampled["count"]),
                strategy=strat,
                bound=bound,
                on_sort=_writer("sampled"),
            )
            labelled.append(("sampled", stats))

    for mode, s in labelled:
        _print_failures(mode, s.failures)

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    _histogram_frame(labelled).to_csv(histogram_path, index=False)

    _print_rich_summary(labelled, bound)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    _console.print(f" - {results_path}")
    _console.print(f" - {summary_path}")
    _console.print(f" - {histogram_path}")
    _console.print(f" - {meta_path}")
    _console.print(f" - {cfg_resolved_path}")

    return RunResult(run_dir=run_dir, stats=[s for _, s in labelled])


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Exhaustively validate the five-value decision trees from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        result = run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise
    if not result.ok:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
