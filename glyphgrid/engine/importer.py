"""Background map import, one request at a time.

Reading a map file can take a while, so ``MapImporter`` runs the read and
the JSON parse/validation on a single worker thread. The result is only
committed to the ``MapDocument`` when the UI thread calls ``poll()``, which
keeps all document mutation on that thread.

While an import is pending, further ``submit()`` calls are rejected. With
at most one import in flight, the document always reflects the most
recently completed successful import.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass

from .document import MapDocument
from .grid import GridModel

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    grid: GridModel | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MapImporter:
    def __init__(
        self, document: MapDocument, executor: Executor | None = None
    ):
        self.document = document
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="map-import"
        )
        self._future: Future | None = None

    @property
    def pending(self) -> bool:
        return self._future is not None

    def submit(self, read_text: Callable[[], str | bytes]) -> bool:
        """Start an import. Returns False if one is already pending."""
        if self._future is not None:
            logger.info("Import already in progress; request ignored")
            return False
        grid = self.document.grid
        serializer = self.document.serializer
        rows, cols = grid.rows, grid.cols

        def job():
            return serializer.parse(read_text(), rows, cols)

        self._future = self._executor.submit(job)
        return True

    def poll(self, timeout: float | None = 0) -> ImportResult | None:
        """Commit a finished import, if any.

        Returns None while nothing is pending or the job is still running
        after *timeout* seconds (``None`` waits indefinitely).
        """
        future = self._future
        if future is None:
            return None
        if timeout != 0:
            wait([future], timeout=timeout)
        if not future.done():
            return None
        self._future = None
        error = future.exception()
        if error is not None:
            logger.info("Import failed: %s", error)
            return ImportResult(error=error)
        matrix = future.result()
        grid = self.document.load_matrix(matrix)
        logger.info("Imported %dx%d map", grid.rows, grid.cols)
        return ImportResult(grid=grid)

    def shutdown(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False)
