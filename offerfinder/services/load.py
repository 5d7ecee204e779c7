"""
CSV -> rows (transport adapter).

- Uses pandas to read each sheet with every column as text (no NaN coercion).
- Emits a flat list of {column: text} rows; column names are stripped.
- Loads all sources at once in a thread pool and hands each one back as it
  completes (iter_loads). One broken sheet never blocks the others: it is
  logged, reported, and treated as empty.

Why separate this:
- Matching code only ever sees in-memory rows, so it stays pure and testable.
- Easy to point sources at local files or URLs without touching the rules.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import pandas as pd

from offerfinder.models.schemas import LoadReport, Row, SourceSpec
from offerfinder.util.logger import get_logger


class DatasetLoadError(Exception):
    """A dataset could not be read; its source degrades to empty."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


def load_csv(location: str, source: Optional[str] = None) -> List[Row]:
    """
    Read one CSV (path or URL) into rows.

    Notes/assumptions:
    - A header row is required; an empty file is an empty dataset, not an error.
    - Rows where every cell is blank are skipped.

    Raises:
        DatasetLoadError: the file is missing, unreachable or unparseable.
    """
    logger = get_logger()
    name = source or location
    logger.info(f"Loading dataset {name} from {location}")
    try:
        df = pd.read_csv(location, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        logger.warning(f"Dataset {name} is empty")
        return []
    except (OSError, ValueError) as e:
        raise DatasetLoadError(name, str(e)) from e

    df.columns = [str(c).strip() for c in df.columns]
    rows: List[Row] = []
    for rec in df.to_dict(orient="records"):
        row = {k: str(v) for k, v in rec.items()}
        if any(v.strip() for v in row.values()):
            rows.append(row)

    logger.info(f"Loaded dataset {name}: {len(rows)} rows")
    return rows


def iter_loads(sources: List[SourceSpec], max_workers: Optional[int] = None,
               loader: Callable[[str, Optional[str]], List[Row]] = load_csv) -> Iterator[Tuple[str, List[Row], Optional[str]]]:
    """
    Load every source concurrently and yield each one as soon as it finishes.

    Yields:
        (source name, rows, failure reason or None). A failed source yields [].
    """
    logger = get_logger()
    if not sources:
        return

    with ThreadPoolExecutor(max_workers=max_workers or len(sources)) as pool:
        futures = {pool.submit(loader, s.location, s.name): s.name for s in sources}
        for fut in as_completed(futures):
            name = futures[fut]
            try:
                rows, reason = fut.result(), None
            except DatasetLoadError as e:
                logger.error(f"Dataset unavailable, using empty rows: {e}")
                rows, reason = [], e.reason
            yield name, rows, reason


def load_datasets(sources: List[SourceSpec], max_workers: Optional[int] = None) -> LoadReport:
    """
    Load every source concurrently and wait for all of them.

    Returns:
        LoadReport: datasets keyed by source name in configured order (failed
        ones are []), plus a source -> reason map of failures.
    """
    done: Dict[str, Tuple[List[Row], Optional[str]]] = {}
    for name, rows, reason in iter_loads(sources, max_workers):
        done[name] = (rows, reason)

    datasets = {s.name: done[s.name][0] for s in sources}
    failed = {s.name: done[s.name][1] for s in sources if done[s.name][1] is not None}
    return LoadReport(datasets=datasets, failed=failed)
