"""
Configuration constants for the media renamer.
"""

# --- File Type Definitions ---
# Extensions are stored lowercase without the leading dot
IMAGE_EXTS = {'jpg', 'jpeg'}
VIDEO_EXTS = {'mp4'}

# Kind labels returned by the classifier
IMAGE = 'image'
VIDEO = 'video'
UNRECOGNIZED = 'unrecognized'

# --- Metadata Parsing ---
DATE_TAG = 'DateTimeOriginal'
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"
# Length of a "YYYY:MM:DD HH:MM:SS" string; anything after it (subseconds, offsets) is ignored
EXIF_DATE_LENGTH = 19

BACKEND_EXIFREAD = 'exifread'
BACKEND_EXIFTOOL = 'exiftool'
BACKENDS = (BACKEND_EXIFREAD, BACKEND_EXIFTOOL)
EXIFTOOL_TIMEOUT = 30  # seconds per file

# --- Naming ---
NAME_FORMAT = "%Y%m%d_%H%M%S"

# --- Collision Handling ---
SUFFIX_SEPARATOR = '_'
SUFFIX_WIDTH = 3
MAX_COPY_ATTEMPTS = 100
COPY_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for copying

# --- Sequence Mode ---
SEQUENCE_EXTS = {'jpg', 'jpeg'}
SEQUENCE_EXT = 'jpg'
