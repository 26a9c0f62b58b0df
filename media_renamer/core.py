import logging
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from . import config
from .exceptions import FileOperationError, InvalidPathError
from .metadata.extract import MetadataExtractor
from .models import BatchResult, MediaFile, RenameProfile
from .organization.mover import UniqueCopier
from .organization.naming import compute_base_name, destination_dir, sequence_name
from .scanning.filesystem import DiskScanner, creation_time


class MediaRenamerApp:
    def __init__(self,
                 profile: Optional[RenameProfile] = None,
                 backend: str = config.BACKEND_EXIFREAD):
        self.profile = profile or RenameProfile()
        self.scanner = DiskScanner(self.profile)
        self.extractor = MetadataExtractor(self.profile.date_tag, backend)
        self.copier = UniqueCopier(self.profile)

    def rename_based_on_date(self, src_root: Path, dest_root: Path) -> BatchResult:
        """
        Copies every file under src_root into the mirrored tree under dest_root,
        renamed after its capture time where one can be found.

        Files are handled one at a time; a failure on one file is logged and
        the batch moves on. Nothing already copied is rolled back.
        """
        src_root, dest_root = self._resolve_roots(src_root, dest_root)
        logging.info(f"Renaming files in {src_root} and saving in {dest_root}")

        files = list(self.scanner.scan(src_root))
        result = BatchResult()

        for media in tqdm(files, desc="Renaming"):
            self.rename_file(media, src_root, dest_root, result)

        logging.info(
            f"Done. Copied {len(result.copied)} files "
            f"({result.fallback_named} kept their name, {result.failed} failed)."
        )
        return result

    def rename_file(self, media: MediaFile, src_root: Path, dest_root: Path, result: BatchResult):
        logging.info(f"Renaming {media.path}")
        try:
            if media.kind == config.UNRECOGNIZED:
                logging.info(f"{media.path} will be ignored")
            else:
                media.capture_datetime = self.extractor.get_capture_datetime(media.path, media.kind)

            base_name = compute_base_name(media)
            dest_dir = destination_dir(media.path, src_root, dest_root)
            media.dest_path = dest_dir / base_name

            self._ensure_dir(dest_dir)
            written = self.copier.copy_unique(media.path, media.dest_path)
        except Exception as e:
            logging.error(f"Impossible to rename file {media.path}: {e}")
            result.failed += 1
            return

        if written is None:
            result.failed += 1
            return
        if media.capture_datetime is None:
            result.fallback_named += 1
        result.copied.append(written)

    def rename_sequence(self, src_root: Path, dest_root: Path) -> BatchResult:
        """
        Copies every JPEG under src_root flat into dest_root as 1.jpg .. N.jpg,
        numbered in order of file creation time.
        """
        src_root, dest_root = self._resolve_roots(src_root, dest_root)
        logging.info(f"Numbering scans in {src_root} and saving in {dest_root}")

        result = BatchResult()
        timed = []
        for path in self.scanner.iter_files(src_root, config.SEQUENCE_EXTS):
            try:
                timed.append((creation_time(path), str(path), path))
            except OSError as e:
                logging.error(f"Cannot stat {path}: {e}")
                result.failed += 1
        timed.sort()

        self._ensure_dir(dest_root)
        total = len(timed)
        for position, (_, _, path) in enumerate(tqdm(timed, desc="Numbering"), start=1):
            written = self.copier.copy_unique(path, dest_root / sequence_name(position, total))
            if written is None:
                result.failed += 1
            else:
                result.copied.append(written)

        logging.info(f"Done. Copied {len(result.copied)} files ({result.failed} failed).")
        return result

    def _resolve_roots(self, src_root: Path, dest_root: Path):
        src_root = Path(src_root).resolve()
        dest_root = Path(dest_root).resolve()
        if not src_root.is_dir():
            raise InvalidPathError(f"Source path {src_root} does not exist or is not a directory.")
        return src_root, dest_root

    def _ensure_dir(self, directory: Path):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Cannot create {directory}: {e}") from e
