"""Default values for the thumbnail pipeline.

These mirror the settings the batch job has always run with. Every value can
be overridden through environment variables (see thumbnailer.config).
"""

from pathlib import Path

# Directories
DEFAULT_DOWNLOAD_DIR = Path("./images")
DEFAULT_RESIZED_DIR = Path("./resized_images")
DEFAULT_INPUTS_FILE = Path("inputs.json")

# Worker pool
DEFAULT_MAX_IMAGE_WORKERS = 5

# Thumbnail geometry and encoding
DEFAULT_RESIZE_WIDTH = 100
DEFAULT_RESIZE_HEIGHT = 100
DEFAULT_JPEG_QUALITY = 75  # Pillow's own default
MIN_JPEG_QUALITY = 1
MAX_JPEG_QUALITY = 95

# Every stored thumbnail is JPEG
IMAGE_EXTENSION = ".jpg"

# Database
DEFAULT_DB_PORT = 5432
IMAGES_TABLE_NAME = "images"
FILENAME_MAX_LENGTH = 255
