from __future__ import annotations

import argparse
import logging
import sys

from stepsort.algorithms import ALGORITHMS, Algorithm
from stepsort.controller import RunController
from stepsort.errors import EngineError
from stepsort.frames import LatestFrameSink, RunState
from stepsort.settings import MAX_SIZE, MIN_SIZE, load_settings
from stepsort.store import SequenceStore


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="stepsort", description="Step-by-step sorting visualizer")
    p.add_argument("--algorithm", "-a", choices=[key for _, key in ALGORITHMS],
                   help="sorter to run (default from settings)")
    p.add_argument("--size", "-n", type=int, help=f"number of bars, {MIN_SIZE}..{MAX_SIZE}")
    p.add_argument("--delay", "-d", type=int, help="pause per step in ms, clamped to 1..201")
    p.add_argument("--seed", type=int, default=None, help="seed for the random magnitudes")
    p.add_argument("--settings", default=None, help="JSON settings file")
    p.add_argument("--headless", action="store_true",
                   help="run one sort without a window and print the result")
    p.add_argument("--values", type=int, nargs="+", default=None,
                   help="explicit magnitudes for --headless instead of random ones")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def _config(args) -> dict:
    cfg = load_settings(args.settings)
    for key in ("algorithm", "size", "delay"):
        value = getattr(args, key)
        if value is not None:
            cfg[key] = value
    cfg["size"] = max(MIN_SIZE, min(MAX_SIZE, int(cfg["size"])))
    return cfg


def run_headless(cfg: dict, seed=None, values=None, out=None) -> int:
    out = out if out is not None else sys.stdout
    sink = LatestFrameSink()
    store = SequenceStore(values) if values else None
    controller = RunController(store=store, sink=sink, seed=seed)
    if values is None:
        controller.resize(cfg["size"])
    controller.set_delay(cfg["delay"])
    algo = Algorithm.parse(cfg["algorithm"])
    before = controller.store.snapshot()
    controller.start(algo)
    try:
        controller.wait()
    except KeyboardInterrupt:
        controller.close()
    frame = controller.frame()
    print(f"{algo.display_name}: {frame.state.value} in {frame.step} steps", file=out)
    print(f"before: {list(before)}", file=out)
    print(f"after:  {list(frame.values)}", file=out)
    if controller.failure is not None:
        return 1
    return 0 if frame.state is RunState.COMPLETED else 130


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        cfg = _config(args)
        Algorithm.parse(cfg["algorithm"])
        if args.headless:
            return run_headless(cfg, seed=args.seed, values=args.values)
        from stepsort.app import run_window
        return run_window(cfg, seed=args.seed)
    except EngineError as e:
        print(f"stepsort: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
