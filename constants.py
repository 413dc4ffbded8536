"""Configuration constants for Image Sorter."""

import os
import tempfile

from PIL import Image

RAW_EXTENSIONS = {
    ".cr2", ".cr3", ".nef", ".arw", ".orf",
    ".raf", ".dng", ".rw2", ".pef", ".srw",
}

# Everything Pillow can open, plus camera RAW files it can't
SUPPORTED_EXTENSIONS = frozenset(
    {ext.lower() for ext in Image.registered_extensions()} | RAW_EXTENSIONS
)

THREAD_POOL_WORKERS = 4

# Scanning
SCAN_RECURSIVE = False
SKIP_HIDDEN = True

# Holding area for soft-deleted files
HOLDING_FOLDER = "image_sorter_holding"
HOLDING_ROOT = os.path.join(tempfile.gettempdir(), HOLDING_FOLDER)

# Each session gets its own sub-directory: <prefix><pid>_<random>
SESSION_PREFIX = "session_"
