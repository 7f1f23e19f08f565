"""
Output File for the runtime pipeline
Holds the last raw API response while the run is in progress and the CSV
export once it has completed.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class OutputFile:
    """
    Truncate-and-write file target.

    Each write fully replaces the previous contents: the file is a snapshot
    of the latest content, not a log.
    """

    def __init__(self, path: str):
        """
        Initialize the OutputFile.

        Args:
            path (str): Destination file; parent directories are created on demand.
        """
        self._path = Path(path).resolve()

    @property
    def path(self) -> Path:
        return self._path

    def overwrite(self, content: str) -> None:
        """Replace the file contents with content."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        logger.debug(f"Wrote {len(content)} characters to {self._path}")
