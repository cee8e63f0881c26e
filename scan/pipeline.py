"""Batch scan helpers: run the detection cascade over many files.

Each file is one unit of work on a bounded thread pool. Calls share no
state, so no synchronization is needed between workers.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from tqdm import tqdm

from config import DEFAULT_WORKERS, REGION_PADDING
from detection import Detector, QRScanError
from preprocessing import CascadeConfig

from .schemas import DetectResult
from .service import detect_and_decode

logger = logging.getLogger(__name__)


@dataclass
class ScanRecord:
    """Outcome of scanning one file: a result, or the error that stopped it."""

    path: Path
    result: DetectResult | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        record: dict = {"path": str(self.path)}
        if self.result is not None:
            record.update(self.result.model_dump())
        if self.error is not None:
            record["error"] = self.error
        return record

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


def scan_file(
    path: Path,
    detector: Detector | None = None,
    config: CascadeConfig | None = None,
    padding: int = REGION_PADDING,
    include_image: bool = False,
) -> ScanRecord:
    """Scan one file, recording detection errors instead of raising them."""
    try:
        result = detect_and_decode(
            path,
            detector=detector,
            config=config,
            padding=padding,
            include_image=include_image,
        )
    except QRScanError as exc:
        logger.warning("Failed to scan %s: %s", path, exc)
        return ScanRecord(path=path, error=str(exc))
    return ScanRecord(path=path, result=result)


def scan_files(
    paths: Iterable[Path],
    workers: int = DEFAULT_WORKERS,
    detector: Detector | None = None,
    config: CascadeConfig | None = None,
    padding: int = REGION_PADDING,
    include_image: bool = False,
    progress: bool = True,
) -> Iterator[ScanRecord]:
    """Scan files concurrently, yielding records in input order.

    Args:
        paths: Image files to scan.
        workers: Maximum number of concurrent cascade runs.
        detector: Detector shared by all workers.
        config: Cascade tuning parameters.
        padding: Crop padding for included images.
        include_image: Include the cropped PNG data URI in each result.
        progress: Show a tqdm progress bar.

    Raises:
        ValueError: If workers is not positive.
    """
    if workers <= 0:
        raise ValueError(f"workers must be positive, got {workers}")

    path_list = list(paths)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        records = pool.map(
            lambda p: scan_file(p, detector, config, padding, include_image),
            path_list,
        )
        yield from tqdm(
            records,
            total=len(path_list),
            desc="Scanning",
            disable=not progress,
        )


def summarize(records: Iterable[ScanRecord]) -> dict[str, int]:
    """Count scanned, decoded, located-only, not-found and failed files."""
    stats = {
        "files_scanned": 0,
        "decoded": 0,
        "located_only": 0,
        "not_found": 0,
        "errors": 0,
    }
    for record in records:
        stats["files_scanned"] += 1
        if record.error is not None:
            stats["errors"] += 1
        elif record.result.data is not None:
            stats["decoded"] += 1
        elif record.result.detected:
            stats["located_only"] += 1
        else:
            stats["not_found"] += 1
    return stats
