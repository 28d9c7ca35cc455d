"""
Batch processing of several images.

The queue holds input paths and runs the map processor over each of them,
writing the maps into an export directory. Stopping is cooperative: the flag
is only checked between two images.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from .image import MAP_TYPES
from .image.core.exceptions import ImageException
from .image.io import is_supported, load_image, output_paths, save_image
from .processor import MapProcessor, MapSet

logger = logging.getLogger(__name__)


@dataclass
class QueueResult:
    """Outcome of processing one queue item."""
    source: Path
    written: Dict[str, Path] = field(default_factory=dict)
    timings_ms: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def save_map_set(map_set: MapSet, path: Path) -> Dict[str, Path]:
    """
    Write every generated map of a MapSet.

    Args:
        map_set: Generated maps
        path: Base path; the map suffixes are appended to its stem

    Returns:
        Mapping from map type to written file
    """
    targets = output_paths(path)
    return {map_type: save_image(image, targets[map_type]) for map_type, image in map_set.items()}


class BatchQueue:
    """Queue of input images processed with one MapProcessor."""

    def __init__(self, processor: Optional[MapProcessor] = None):
        self.processor = processor or MapProcessor()
        self._items: List[Path] = []
        self._stop_requested = False

    def add(self, paths: Iterable) -> List[Path]:
        """
        Add images to the queue.

        Args:
            paths: Input file paths

        Returns:
            The paths that were rejected because of an unsupported format
        """
        rejected = []
        for path in map(Path, paths):
            if is_supported(path):
                self._items.append(path)
            else:
                logger.warning(f"Unsupported image format, not queued: {path}")
                rejected.append(path)
        return rejected

    def remove(self, path) -> None:
        self._items.remove(Path(path))

    @property
    def items(self) -> List[Path]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def stop(self) -> None:
        """Request the running batch to stop after the current image."""
        self._stop_requested = True

    def run(
        self,
        export_dir,
        maps: Iterable[str] = MAP_TYPES,
        progress: Optional[Callable[[int, int, Path], None]] = None
    ) -> Iterator[QueueResult]:
        """
        Process every queued image.

        A failing image is reported in its result and does not stop the batch.

        Args:
            export_dir: Directory receiving the maps
            maps: Map types to generate
            progress: Optional callback called with (index, total, path) before each image

        Yields:
            One QueueResult per processed image
        """
        export_dir = Path(export_dir)
        maps = list(maps)
        self._stop_requested = False
        total = len(self._items)

        for index, source in enumerate(list(self._items)):
            if self._stop_requested:
                logger.info(f"Queue stopped before item {index + 1} of {total}")
                break
            if progress is not None:
                progress(index, total, source)

            result = QueueResult(source=source)
            try:
                image = load_image(source)
                map_set = self.processor.process(image, maps)
                result.written = save_map_set(map_set, export_dir / source.name)
                result.timings_ms = dict(map_set.timings_ms)
                logger.info(f"[Queue] Image {index + 1} exported: {export_dir / source.name}")
            except ImageException as e:
                logger.error(f"[Queue] Image {index + 1} failed: {e}")
                result.error = str(e)
            yield result

        self._stop_requested = False
