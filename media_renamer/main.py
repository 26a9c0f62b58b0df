import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import config
from .core import MediaRenamerApp
from .models import RenameProfile

MODE_DATE = "date"
MODE_SEQUENCE = "sequence"


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, if asked, to a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Media Renamer: copy photos and videos under capture-time names")

    p.add_argument("src", type=Path, help="Source directory to scan")
    p.add_argument("dest", type=Path, help="Destination root (source subfolders are mirrored)")

    p.add_argument("--mode", choices=[MODE_DATE, MODE_SEQUENCE], default=MODE_DATE,
                   help="'date' names files by capture time, 'sequence' numbers JPEG scans by creation time")
    p.add_argument("--images-only", action="store_true", help="Only scan and rename .jpg files")
    p.add_argument("--tag", default=config.DATE_TAG, help="Metadata tag holding the capture time")
    p.add_argument("--backend", choices=config.BACKENDS, default=config.BACKEND_EXIFREAD,
                   help="How image metadata is read")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    logging.info("=== Media Renamer Started ===")

    if args.images_only:
        profile = RenameProfile.images_only(date_tag=args.tag)
    else:
        profile = RenameProfile(date_tag=args.tag)

    app = MediaRenamerApp(profile, backend=args.backend)

    try:
        if args.mode == MODE_SEQUENCE:
            app.rename_sequence(args.src, args.dest)
        else:
            app.rename_based_on_date(args.src, args.dest)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except Exception:
        logging.exception("Fatal error during renaming.")
        sys.exit(1)


if __name__ == "__main__":
    main()
