from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import FrozenSet, List, Optional

from . import config


@dataclass
class MediaFile:
    """
    A file found under the source root. Rebuilt fresh for every file of a run.
    """
    path: Path
    ext: str                # lowercase, no leading dot
    kind: str               # image/video/unrecognized

    capture_datetime: Optional[datetime] = None
    dest_path: Optional[Path] = None


@dataclass(frozen=True)
class RenameProfile:
    """
    The knobs that distinguish one renaming variant from another.
    """
    image_exts: FrozenSet[str] = frozenset(config.IMAGE_EXTS)
    video_exts: FrozenSet[str] = frozenset(config.VIDEO_EXTS)
    # None means every "*.*" file is picked up
    scan_exts: Optional[FrozenSet[str]] = None
    date_tag: str = config.DATE_TAG
    suffix_separator: str = config.SUFFIX_SEPARATOR
    suffix_width: int = config.SUFFIX_WIDTH
    max_attempts: int = config.MAX_COPY_ATTEMPTS

    @classmethod
    def images_only(cls, date_tag: str = config.DATE_TAG) -> "RenameProfile":
        """Reduced variant: only JPEGs are scanned and renamed."""
        return cls(video_exts=frozenset(), scan_exts=frozenset({'jpg'}), date_tag=date_tag)


@dataclass(frozen=True)
class CopyAttempt:
    dest_path: Path
    index: int


@dataclass
class BatchResult:
    copied: List[Path] = field(default_factory=list)
    fallback_named: int = 0
    failed: int = 0
