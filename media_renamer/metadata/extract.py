import logging
import subprocess
import json
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional

import exifread

from .. import config
from ..exceptions import MetadataExtractionError


def parse_exif_date(value) -> Optional[datetime]:
    """
    Parses a "YYYY:MM:DD HH:MM:SS" string as UTC.
    Returns None for empty or non-conforming values.
    """
    if value is None:
        return None
    text = str(value).strip().strip('\x00').strip()
    if len(text) < config.EXIF_DATE_LENGTH:
        return None
    try:
        dt = datetime.strptime(text[:config.EXIF_DATE_LENGTH], config.EXIF_DATE_FORMAT)
    except ValueError:
        return None
    return dt.replace(tzinfo=timezone.utc)


def file_modified_datetime(path: Path) -> datetime:
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


class MetadataExtractor:
    """
    Resolves the capture time of a media file.

    Strategies:
      - Images: embedded tag via 'exifread' (default) or the 'exiftool' command.
      - Video: filesystem modification time, never embedded metadata.

    Any failure while reading image metadata is logged and reported as
    "no capture time" so a single bad file cannot stop a batch.
    """

    def __init__(self, date_tag: str = config.DATE_TAG, backend: str = config.BACKEND_EXIFREAD):
        if backend not in config.BACKENDS:
            raise ValueError(f"Unknown metadata backend: {backend}")
        self.date_tag = date_tag
        self.backend = backend

    def get_capture_datetime(self, path: Path, kind: str) -> Optional[datetime]:
        if kind == config.VIDEO:
            return file_modified_datetime(path)
        if kind == config.IMAGE:
            return self.get_image_datetime(path)
        return None

    def get_image_datetime(self, path: Path) -> Optional[datetime]:
        try:
            if self.backend == config.BACKEND_EXIFTOOL:
                raw = self._read_tag_exiftool(path)
            else:
                raw = self._read_tag_exifread(path)
        except Exception as e:
            logging.warning(f"Metadata read failed for {path}: {e}")
            return None

        dt = parse_exif_date(raw)
        if dt is None:
            logging.info(f"{path} has no creation date")
        return dt

    # --- Internal Extraction Helpers ---

    def _read_tag_exifread(self, path: Path) -> Optional[str]:
        """Looks the tag up in any IFD group ('EXIF DateTimeOriginal', 'Image DateTime', ...)."""
        with path.open('rb') as f:
            # details=False skips makernotes and thumbnails
            tags = exifread.process_file(f, details=False)

        if not tags:
            return None

        for group in ('EXIF', 'Image'):
            key = f"{group} {self.date_tag}"
            if key in tags:
                return str(tags[key])

        suffix = f" {self.date_tag}"
        for key, value in tags.items():
            if key.endswith(suffix):
                return str(value)
        return None

    def _read_tag_exiftool(self, path: Path) -> Optional[str]:
        """
        Wraps the 'exiftool' command line utility.
        Must be installed and on the system PATH.
        """
        # -j = JSON output, only the requested tag
        cmd = ["exiftool", "-j", f"-{self.date_tag}", str(path)]

        try:
            out = subprocess.run(cmd, capture_output=True, text=True, check=True,
                                 timeout=config.EXIFTOOL_TIMEOUT).stdout
        except (OSError, subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
            raise MetadataExtractionError(f"exiftool failed: {e}") from e

        if not out.strip():
            return None

        try:
            data_list = json.loads(out)
        except ValueError as e:
            raise MetadataExtractionError(f"exiftool returned invalid JSON: {e}") from e

        if not data_list:
            return None

        value = data_list[0].get(self.date_tag)
        return str(value) if value is not None else None
