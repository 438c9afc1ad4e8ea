"""
Configuration constants for the BlackVue sync tool.
"""
import re

# --- Device Protocol ---
LISTING_PATH = "/blackvue_vod.cgi"
SUPPORTED_LIST_VERSION = "v:1.00"

# Field markers in each listing record: n:<path>,s:<size>
PATH_MARKER = "n:"
SIZE_MARKER = "s:"

# 8-digit date + 6-digit time, e.g. 20180703_183000_NF.mp4
FILENAME_DATETIME_RE = re.compile(r'(?<!\d)(\d{8})_(\d{6})(?!\d)')
FILENAME_DATETIME_FORMAT = "%Y%m%d%H%M%S"

# --- Organization ---
FOLDER_PATTERN = "{year:04d}-{month:02d}-{day:02d}"
STAGING_SUFFIX = ".part"

# --- Network ---
DEFAULT_CONNECT_TIMEOUT = 5     # seconds, listing request
DEFAULT_DOWNLOAD_TIMEOUT = 300  # seconds, per video file
DOWNLOAD_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for streaming to disk
HTTP_OK = 200

# --- Logging ---
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
