import shutil
import logging
from pathlib import Path
from typing import Iterator, Optional

from .. import config
from ..models import CopyAttempt, RenameProfile
from .naming import indexed_name


class UniqueCopier:
    """
    Copies files without ever replacing an existing destination.

    Name collisions are the normal case (burst shots, same-second clips), so
    a failed attempt moves on to the next suffixed name instead of aborting.
    """

    def __init__(self, profile: Optional[RenameProfile] = None):
        self.profile = profile or RenameProfile()

    def attempts(self, dest: Path) -> Iterator[CopyAttempt]:
        for i in range(self.profile.max_attempts):
            candidate = indexed_name(dest, i, self.profile.suffix_separator, self.profile.suffix_width)
            yield CopyAttempt(candidate, i)

    def copy_unique(self, src: Path, dest: Path) -> Optional[Path]:
        """
        Returns the path actually written, or None once every attempt failed.
        """
        for attempt in self.attempts(dest):
            try:
                logging.info(f"Copying to {attempt.dest_path}")
                exclusive_copy(src, attempt.dest_path)
                return attempt.dest_path
            except Exception as e:
                logging.error(f"Impossible to copy {src} to {attempt.dest_path}: {e}")

        logging.error(f"Giving up on {src} after {self.profile.max_attempts} attempts")
        return None


def exclusive_copy(src: Path, dest: Path):
    """
    Copies data and metadata like shutil.copy2, but fails with FileExistsError
    when dest already exists. The create-if-absent is done by the open call
    itself so no other writer can slip in between a check and the copy.
    """
    with src.open('rb') as fsrc:
        with dest.open('xb') as fdst:
            try:
                shutil.copyfileobj(fsrc, fdst, config.COPY_CHUNK_SIZE)
            except BaseException:
                fdst.close()
                dest.unlink()
                raise
    try:
        shutil.copystat(src, dest)
    except OSError as e:
        logging.warning(f"Copied {dest} but could not preserve timestamps: {e}")
