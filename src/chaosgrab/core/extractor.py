"""
Archive Extraction Module

Unpacks a downloaded ZIP archive into a destination directory, mirroring
the archive's internal layout and the file modes it declares.
"""

import logging
import os
import shutil
import stat
import zipfile
import zlib
from pathlib import Path

from .errors import ExtractionError


# Failures that can surface while decompressing a single member.
_MEMBER_ERRORS = (OSError, zipfile.BadZipFile, zlib.error, RuntimeError, NotImplementedError)


class ArchiveExtractor:
    """
    ZIP extractor that refuses members escaping the destination directory.

    Members are written one at a time; a failure stops the extraction and
    leaves already written files in place.
    """

    def __init__(self, chunk_size: int = 64 * 1024):
        self.chunk_size = chunk_size
        self.logger = logging.getLogger(__name__)

    def extract(self, archive_path: Path, dest_dir: Path) -> int:
        """
        Extract every member of an archive below `dest_dir`.

        Args:
            archive_path: Path to the ZIP file
            dest_dir: Directory receiving the archive contents

        Returns:
            Number of regular files written

        Raises:
            ExtractionError: If the archive cannot be opened, contains an
                unsafe path, or a member cannot be written
        """
        dest_dir = Path(dest_dir)
        try:
            archive = zipfile.ZipFile(archive_path)
        except (OSError, zipfile.BadZipFile) as e:
            raise ExtractionError(f"error opening zip file: {e}") from e

        with archive:
            members = archive.infolist()
            targets = [self._member_target(dest_dir, info.filename) for info in members]

            files_written = 0
            for info, target in zip(members, targets):
                if is_member_dir(info):
                    try:
                        target.mkdir(parents=True, exist_ok=True)
                    except OSError as e:
                        raise ExtractionError(f"error creating directory {target}: {e}") from e
                    continue

                self._write_member(archive, info, target)
                files_written += 1

        self.logger.info(f"Extracted {files_written} files into {dest_dir}")
        return files_written

    def _write_member(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo, target: Path):
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with archive.open(info) as src, open(target, 'wb') as dst:
                shutil.copyfileobj(src, dst, self.chunk_size)
            mode = member_mode(info)
            if mode:
                os.chmod(target, mode)
        except _MEMBER_ERRORS as e:
            raise ExtractionError(f"error writing {info.filename} to {target}: {e}") from e

    def _member_target(self, dest_dir: Path, member_name: str) -> Path:
        """
        Resolve where a member lands, rejecting absolute and escaping paths.
        """
        relative = Path(os.path.normpath(member_name))
        if relative.is_absolute() or relative.drive or relative.parts[:1] == ('..',):
            raise ExtractionError(f"unsafe path in archive: {member_name}")

        target = dest_dir / relative
        try:
            target.resolve().relative_to(dest_dir.resolve())
        except ValueError:
            raise ExtractionError(f"unsafe path in archive: {member_name}") from None
        return target


def member_mode(info: zipfile.ZipInfo) -> int:
    """Unix permission bits stored for a member, or 0 if none were recorded."""
    return (info.external_attr >> 16) & 0o777


def is_member_dir(info: zipfile.ZipInfo) -> bool:
    """
    Whether a member denotes a directory.

    Besides a trailing slash, the unix S_IFDIR mode and the MS-DOS
    directory attribute (0x10) mark a directory.
    """
    return (
        info.is_dir()
        or stat.S_ISDIR(info.external_attr >> 16)
        or bool(info.external_attr & 0x10)
    )
