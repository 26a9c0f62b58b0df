from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .. import config
from ..models import MediaFile


def format_name(dt: datetime, ext: str) -> str:
    """
    Renders "YYYYMMDD_HHMMSS.ext" in UTC with a lowercase extension.
    Naive datetimes are taken to already be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    stem = dt.astimezone(timezone.utc).strftime(config.NAME_FORMAT)
    if not ext:
        return stem
    return f"{stem}.{ext.lower()}"


def compute_base_name(media: MediaFile) -> str:
    """Timestamp name when a capture time is known, else the original basename untouched."""
    if media.capture_datetime is None:
        return media.path.name
    return format_name(media.capture_datetime, media.ext)


def destination_dir(path: Path, src_root: Path, dest_root: Path) -> Path:
    """
    Swaps the source-root prefix of the file's directory for the destination root.

    This is a plain text substitution of the first occurrence, so both roots
    must be normalized absolute paths.
    """
    return Path(str(path.parent).replace(str(src_root), str(dest_root), 1))


def indexed_name(path: Path, index: int,
                 separator: str = config.SUFFIX_SEPARATOR,
                 width: int = config.SUFFIX_WIDTH) -> Path:
    """
    Candidate path for a copy attempt: index 0 is the path itself,
    index k appends "_00k" before the extension.
    """
    if index == 0:
        return path
    return path.with_name(f"{path.stem}{separator}{index:0{width}d}{path.suffix}")


def sequence_name(position: int, total: int, ext: Optional[str] = None) -> str:
    """1-based position zero-padded to the digit count of total, e.g. 007.jpg of 120."""
    ext = ext or config.SEQUENCE_EXT
    return f"{position:0{len(str(total))}d}.{ext}"
