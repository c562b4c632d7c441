#!/usr/bin/env python3
"""
CLI entry point for the carrier network-quality predictor.

Defines the following commands:
  carrier replay DAY_FILE... --trace FILE [--out CSV]
  carrier serve DAY_FILE... [--host HOST] [--port 8000]
  carrier version
"""

import sys
from argparse import ArgumentParser, Namespace
from dataclasses import replace
from importlib.metadata import PackageNotFoundError, version as _get_version

import pandas as pd
import uvicorn
from rich.console import Console
from rich.table import Table

from carrier.utils.log import get_logger, set_level
from carrier.utils.validate import TracePoint
from carrier.server import create_app
from carrier.analysis.config import MatcherConfig
from carrier.analysis.env import CarrierEnv

logger = get_logger(__name__)

TRACE_COLUMNS = ["time", "lng", "lat", "cell"]


def _build_config(args: Namespace) -> MatcherConfig:
    """
    Start from the selected preset and apply any threshold overrides.
    """
    cfg = MatcherConfig.pedestrian() if args.pedestrian else MatcherConfig.driving()
    overrides = {
        field: getattr(args, field)
        for field in ("bbox_deg", "same_location_m", "window_s")
        if getattr(args, field) is not None
    }
    return replace(cfg, **overrides)


def _load_env(day_files: list[str], cfg: MatcherConfig) -> CarrierEnv:
    """
    Build the predictor, logging which day file could not be loaded.
    """
    try:
        return CarrierEnv(day_files, cfg)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load day datasets: %s", e)
        raise


def load_trace(trace_file: str) -> list[TracePoint]:
    """
    Read a replay trace: one `time, lng, lat, cell` record per line.
    """
    raw = pd.read_csv(trace_file, sep=r"[,\s]+", engine="python", header=None, comment="#")
    if raw.shape[1] != len(TRACE_COLUMNS):
        raise ValueError(
            f"{trace_file}: expected {len(TRACE_COLUMNS)} columns, found {raw.shape[1]}"
        )
    raw.columns = TRACE_COLUMNS
    return [TracePoint(**rec) for rec in raw.to_dict(orient="records")]


def replay(day_files: list[str], trace_file: str, out: str | None, cfg: MatcherConfig) -> pd.DataFrame:
    """
    Drive the predictor through a recorded trace.

    Parameters
    ----------
    day_files
        Historical trajectory files, one per day.
    trace_file
        Trace to replay, one `time, lng, lat, cell` record per line.
    out
        Optional CSV path for the stacked predictions; when omitted they
        are printed as a table.
    cfg
        Matching thresholds.

    Returns
    -------
    pd.DataFrame
        Every prediction, with a leading `step` column.
    """
    logger.info("Replay: days=%d, trace=%s, out=%s", len(day_files), trace_file, out)
    env = _load_env(day_files, cfg)
    trace = load_trace(trace_file)

    predictions = []
    for step, point in enumerate(trace):
        env.update_cell(point.cell)
        env.update_location(point.lng, point.lat, point.time)
        pred = env.get_prediction()
        pred.insert(0, "step", step)
        predictions.append(pred)
    result = pd.concat(predictions, ignore_index=True) if predictions else pd.DataFrame(columns=["step"])
    logger.info("Replayed %d trace points", len(trace))

    if out:
        result.to_csv(out, index=False)
        logger.info("Wrote %d prediction rows to %s", len(result), out)
    else:
        _print_predictions(result)
    return result


def _print_predictions(df: pd.DataFrame) -> None:
    table = Table(title="Predictions")
    for col in df.columns:
        table.add_column(str(col), justify="right")
    for rec in df.itertuples(index=False):
        table.add_row(*("-" if pd.isna(v) else f"{v:.3f}" if isinstance(v, float) else str(v) for v in rec))
    Console().print(table)


def serve(day_files: list[str], host: str, port: int, cfg: MatcherConfig) -> None:
    """
    Spin up FastAPI+Uvicorn to serve predictions over HTTP.

    Parameters
    ----------
    day_files
        Historical trajectory files, one per day.
    host
        Interface to bind.
    port
        Port on which to serve HTTP.
    cfg
        Matching thresholds.
    """
    logger.info("Serve: days=%d, host=%s, port=%d", len(day_files), host, port)
    env = _load_env(day_files, cfg)
    app = create_app(env)
    uvicorn.run(app, host=host, port=port)

def version() -> None:
    """
    Print the installed carrier package version.
    """
    try:
        ver = _get_version("carrier")
    except PackageNotFoundError:
        ver = "unknown"
    logger.info("carrier version %s", ver)


def _add_engine_args(p: ArgumentParser) -> None:
    p.add_argument("day_files", nargs="+", help="Historical trajectory files, one per day.")
    p.add_argument("--pedestrian", action="store_true", help="Use the walking-trace preset.")
    p.add_argument("--bbox-deg", dest="bbox_deg", type=float, help="Bounding-box half-width in degrees.")
    p.add_argument(
        "--same-location-m", dest="same_location_m", type=float,
        help="Maximum anchor distance in metres.",
    )
    p.add_argument("--window-s", dest="window_s", type=int, help="Prediction horizon in seconds.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log per-request debug output.")


def parse_args(argv: list[str] | None = None) -> Namespace:
    """
    Parse command-line arguments and return the populated namespace.
    """
    parser = ArgumentParser(prog="carrier")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # carrier replay
    p = subparsers.add_parser("replay", help="Replay a trace against the day datasets.")
    _add_engine_args(p)
    p.add_argument("--trace", required=True, type=str, help="Trace file to replay.")
    p.add_argument("--out", type=str, help="CSV file for the predictions.")

    # carrier serve
    p = subparsers.add_parser("serve", help="Serve via FastAPI + Uvicorn.")
    _add_engine_args(p)
    p.add_argument("--host", type=str, default="127.0.0.1", help="Interface to bind.")
    p.add_argument(
        "--port", type=int, default=8000, help="Port number to serve on."
    )

    # carrier version
    subparsers.add_parser("version", help="Show carrier version and exit.")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """
    Entry point: dispatch to the selected subcommand.
    """
    args = parse_args(argv)
    if getattr(args, "verbose", False):
        set_level("DEBUG")
    match args.command:
        case "replay":
            replay(args.day_files, args.trace, args.out, _build_config(args))
        case "serve":
            serve(args.day_files, args.host, args.port, _build_config(args))
        case "version":
            version()
        case _:
            sys.exit(1)


if __name__ == "__main__":
    main()
