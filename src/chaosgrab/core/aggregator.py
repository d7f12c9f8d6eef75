"""
Text Aggregation Module

Collects every text file under the workspace into one output file. Files
are visited depth-first, and entries inside each directory in lexical
order of their names, so an unchanged workspace always yields
byte-identical output.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List

from .errors import AggregationError
from .results import AggregationResult


SEPARATOR = b"\n"


class TextAggregator:
    """
    Concatenates text files into a single output file.

    Each included file contributes its raw bytes followed by one newline.
    """

    def __init__(self, suffix: str = ".txt", chunk_size: int = 64 * 1024):
        self.suffix = suffix
        self.chunk_size = chunk_size
        self.logger = logging.getLogger(__name__)

    def find_text_files(self, root: Path) -> List[Path]:
        """
        Recursively list files under `root` whose name ends with the suffix.

        Args:
            root: Directory to scan

        Returns:
            Paths in traversal order
        """
        found: List[Path] = []
        self._walk(Path(root), found)
        return found

    def _walk(self, directory: Path, found: List[Path]):
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            self.logger.warning(f"Cannot list {directory}: {e}")
            return

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                self._walk(Path(entry.path), found)
            elif entry.is_file() and entry.name.endswith(self.suffix):
                found.append(Path(entry.path))

    def aggregate(self, root: Path, output_path: Path) -> AggregationResult:
        """
        Write every text file under `root` into `output_path`.

        Args:
            root: Directory to scan
            output_path: File to create or truncate

        Returns:
            Counts of included and skipped files

        Raises:
            AggregationError: If the output file cannot be created
        """
        output_path = Path(output_path)
        text_files = [p for p in self.find_text_files(root) if p.resolve() != output_path.resolve()]
        result = AggregationResult(output_path=output_path)

        try:
            dest = open(output_path, 'wb')
        except OSError as e:
            raise AggregationError(f"error creating {output_path}: {e}") from e

        with dest:
            for path in text_files:
                try:
                    with open(path, 'rb') as src:
                        shutil.copyfileobj(src, dest, self.chunk_size)
                        size = src.tell()
                    dest.write(SEPARATOR)
                except OSError as e:
                    self.logger.error(f"Failed to copy {path} to {output_path}: {e}")
                    result.files_skipped += 1
                    continue

                result.files_included += 1
                result.bytes_written += size + len(SEPARATOR)

        self.logger.info(f"Successfully created {output_path} with all {self.suffix} file content.")
        return result
