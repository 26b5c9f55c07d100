"""
Corpus discovery.

Walks a directory tree for documents to search. Symlinked directories are
followed by default and each real directory is entered at most once, so a
link pointing back up the tree cannot loop. Results come out in a stable
sorted order.
"""

import os
from pathlib import Path
from typing import Iterator, List, Union

from ..core import get_config, get_logger, FileAccessError
from ..utils import get_file_size_mb

logger = get_logger(__name__)


class FileScanner:
    """Finds PDF files under a corpus root."""

    def __init__(
        self,
        root_directory: Union[str, Path] = None,
        extensions: List[str] = None,
        max_file_size_mb: float = None,
        follow_symlinks: bool = None
    ):
        """
        Args:
            root_directory: Corpus root. Defaults to paths.default_corpus_directory.
            extensions: Accepted suffixes, compared case-insensitively.
            max_file_size_mb: Files above this size are skipped.
            follow_symlinks: Descend into symlinked directories.
        """
        config = get_config()

        self.root_directory = Path(root_directory or config.paths.default_corpus_directory)
        self.extensions = {
            ext.lower() for ext in (extensions or config.extraction.supported_extensions)
        }
        self.max_file_size_mb = max_file_size_mb or config.extraction.max_file_size_mb
        self.follow_symlinks = (
            config.extraction.follow_symlinks if follow_symlinks is None else follow_symlinks
        )

    def __iter__(self) -> Iterator[Path]:
        return self.scan()

    def scan(self) -> Iterator[Path]:
        """
        Yield every accepted file under the root.

        Raises:
            FileAccessError: The root is missing or not a directory.
        """
        if not self.root_directory.is_dir():
            raise FileAccessError(
                f"Root directory does not exist: {self.root_directory}",
                path=str(self.root_directory)
            )

        logger.info(f"Scanning {self.root_directory}")

        found = 0
        too_large = 0

        for candidate in self._candidates():
            try:
                if not candidate.is_file():
                    continue
                size_mb = get_file_size_mb(candidate)
            except OSError as e:
                logger.warning(f"Cannot stat {candidate}: {e}")
                continue

            if size_mb > self.max_file_size_mb:
                logger.warning(
                    f"Skipping {candidate}: {size_mb}MB exceeds the {self.max_file_size_mb}MB limit"
                )
                too_large += 1
                continue

            found += 1
            yield candidate

        logger.info(f"Found {found} files in {self.root_directory} ({too_large} over size limit)")

    def list_all(self) -> List[Path]:
        """Return the scan result as a list."""
        return list(self.scan())

    def _candidates(self) -> Iterator[Path]:
        """Walk the tree and yield paths with an accepted suffix."""
        seen_dirs = set()

        for dirpath, dirnames, filenames in os.walk(
            self.root_directory,
            followlinks=self.follow_symlinks,
            onerror=self._on_walk_error
        ):
            real_dir = os.path.realpath(dirpath)
            if real_dir in seen_dirs:
                dirnames[:] = []
                continue
            seen_dirs.add(real_dir)

            dirnames.sort()

            for filename in sorted(filenames):
                if os.path.splitext(filename)[1].lower() in self.extensions:
                    yield Path(dirpath) / filename

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning(f"Cannot read directory {error.filename}: {error.strerror}")
