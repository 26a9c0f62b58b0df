import os
import logging
from pathlib import Path
from typing import Iterator, Optional, AbstractSet

from .. import config
from ..models import MediaFile, RenameProfile


def get_extension(path: Path) -> str:
    """Lowercase extension without the dot ('' when the name has none)."""
    return path.suffix[1:].lower()


def classify(path: Path, profile: Optional[RenameProfile] = None) -> str:
    """Maps a path to image/video/unrecognized by case-insensitive extension."""
    profile = profile or RenameProfile()
    ext = get_extension(path)
    if ext in profile.image_exts:
        return config.IMAGE
    if ext in profile.video_exts:
        return config.VIDEO
    return config.UNRECOGNIZED


def creation_time(path: Path) -> float:
    """Birth time where the platform records it, otherwise modification time."""
    st = path.stat()
    return getattr(st, 'st_birthtime', st.st_mtime)


class DiskScanner:
    def __init__(self, profile: Optional[RenameProfile] = None):
        self.profile = profile or RenameProfile()

    def scan(self, root: Path) -> Iterator[MediaFile]:
        """
        Generator that yields a MediaFile for every candidate file under root.
        """
        for path in self.iter_files(root, self.profile.scan_exts):
            yield MediaFile(path=path, ext=get_extension(path), kind=classify(path, self.profile))

    def iter_files(self, root: Path, exts: Optional[AbstractSet[str]] = None) -> Iterator[Path]:
        """
        Depth-first walker using os.scandir for speed.

        Matches like a case-insensitive "**/*.*" glob: hidden entries are
        skipped and a file needs an extension to be listed. When exts is
        given only those extensions are yielded.
        """
        stack = [root]
        while stack:
            current = stack.pop()

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except (OSError, PermissionError):
                logging.warning(f"Permission denied: {current}")
                continue

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            files = []
            for e in entries:
                if e.name.startswith('.'):
                    continue
                if e.is_dir(follow_symlinks=False):
                    dirs.append(Path(e.path))
                elif e.is_file():
                    files.append(Path(e.path))

            # Push dirs to stack (reversed so we process A before Z)
            for d in reversed(dirs):
                stack.append(d)

            for f in files:
                ext = get_extension(f)
                if not ext:
                    continue
                if exts is not None and ext not in exts:
                    continue
                yield f
