#!/usr/bin/env python3
"""
Concurrent path generation for many grids.

Each worker task gets its own copy of the pixel shape so parameter changes
made by the caller while a batch is running cannot leak into it.
"""

import concurrent.futures
import logging
from typing import List, Optional, Sequence, Tuple

from tqdm import tqdm

from .config import BATCH_MAX_WORKERS, BATCH_SERIAL_THRESHOLD
from .geometry import RoundedRect
from .grid import ModuleGrid
from .shapes import PixelShape

logger = logging.getLogger(__name__)


def _generate_one(shape: PixelShape, grid: ModuleGrid, size: Tuple[float, float],
                  select_on: bool, is_template: bool) -> List[RoundedRect]:
    return shape.generate(size, grid, select_on=select_on, is_template=is_template)


def generate_batch(shape: PixelShape,
                   grids: Sequence[ModuleGrid],
                   size: Tuple[float, float],
                   select_on: bool = True,
                   is_template: bool = False,
                   max_workers: Optional[int] = None,
                   show_progress: bool = False) -> List[List[RoundedRect]]:
    """
    Generate primitives for every grid with the same shape settings.

    Args:
        shape: Pixel shape to use; copied per task
        grids: Grids to process
        size: Canvas (width, height) shared by all grids
        select_on: True for the on pass, False for the off pass
        is_template: Skip finder eye masking
        max_workers: Thread pool size (default: BATCH_MAX_WORKERS)
        show_progress: Show a tqdm progress bar

    Returns:
        One primitive list per grid, in input order
    """
    if not grids:
        return []

    max_workers = max_workers or BATCH_MAX_WORKERS
    results: List[Optional[List[RoundedRect]]] = [None] * len(grids)

    # Small batches are not worth the pool startup
    if len(grids) < BATCH_SERIAL_THRESHOLD or max_workers == 1:
        grid_iter = enumerate(grids)
        if show_progress:
            grid_iter = tqdm(grid_iter, total=len(grids), desc="Generating paths")
        snapshot = shape.copy()
        for i, grid in grid_iter:
            results[i] = _generate_one(snapshot, grid, size, select_on, is_template)
        return results

    logger.info(f"Generating paths for {len(grids)} grids with {max_workers} workers")

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_index = {
            executor.submit(_generate_one, shape.copy(), grid, size, select_on, is_template): i
            for i, grid in enumerate(grids)
        }

        done_iter = concurrent.futures.as_completed(future_to_index)
        if show_progress:
            done_iter = tqdm(done_iter, total=len(future_to_index), desc="Generating paths")

        for future in done_iter:
            results[future_to_index[future]] = future.result()

    return results
