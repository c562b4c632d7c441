"""
Trajectory parser: load one day of recorded drive/walk data per file into a labelled frame.
"""

from pathlib import Path
from typing import Iterable

import pandas as pd
from rich.console import Console
from rich.progress import Progress

from carrier.analysis.types import DAY_COLUMNS
from carrier.utils.log import get_logger

logger = get_logger(__name__)


def load_day(file_path: str | Path, header: bool = False) -> pd.DataFrame:
    """
    Read one day dataset.

    The file holds one record per line, fields separated by commas, tabs
    or spaces, in the order of ``DAY_COLUMNS``. Lines starting with ``#``
    are ignored. Every day is expected to share that layout; mixing
    layouts across days is not detected here.

    Parameters
    ----------
    file_path
        Path to the day file.
    header
        Whether the first line is a header row to skip.

    Returns
    -------
    pd.DataFrame
        One row per record, columns labelled with ``DAY_COLUMNS``, all float.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file does not have exactly ``len(DAY_COLUMNS)`` numeric fields per line.
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"No such trajectory file: {path}")

    raw = pd.read_csv(
        path,
        sep=r"[,\s]+",
        engine="python",
        header=0 if header else None,
        comment="#",
    )
    if raw.shape[1] != len(DAY_COLUMNS):
        raise ValueError(
            f"{path}: expected {len(DAY_COLUMNS)} columns, found {raw.shape[1]}"
        )
    raw.columns = DAY_COLUMNS
    try:
        return raw.astype(float)
    except ValueError as e:
        raise ValueError(f"{path}: non-numeric field ({e})") from e


def load_days(paths: Iterable[str | Path], header: bool = False) -> list[pd.DataFrame]:
    """
    Load every day file in order, reporting progress on the console.
    """
    paths = list(paths)
    logger.debug("Got %d data files", len(paths))
    frames: list[pd.DataFrame] = []
    with Progress(console=Console(stderr=True), transient=True) as progress:
        task = progress.add_task("Reading", total=len(paths))
        for p in paths:
            frames.append(load_day(p, header=header))
            progress.advance(task)
    logger.info("Loaded %d day datasets (%d records)", len(frames), sum(len(f) for f in frames))
    return frames
