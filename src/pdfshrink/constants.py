"""Centralized constants for pdfshrink."""

from __future__ import annotations

# =============================================================================
# Ghostscript Engine
# =============================================================================

# Candidate executable names, in lookup order (console builds on Windows)
ENGINE_CANDIDATES = ("gs", "gswin64c", "gswin32c")
DEFAULT_ENGINE = "gs"

# Target resolution for downsampled images (dpi)
IMAGE_RESOLUTION = 135
COMPATIBILITY_LEVEL = "1.4"
PDF_SETTINGS = "/ebook"
DOWNSAMPLE_TYPE = "/Bicubic"

# Fixed argument template; only the output and input paths vary per file
ENGINE_ARGS: tuple[str, ...] = (
    "-q",
    "-dBATCH",
    "-dSAFER",
    "-dNOPAUSE",
    "-sDEVICE=pdfwrite",
    f"-dCompatibilityLevel={COMPATIBILITY_LEVEL}",
    f"-dPDFSETTINGS={PDF_SETTINGS}",
    "-dAutoRotatePages=/None",
    f"-dColorImageDownsampleType={DOWNSAMPLE_TYPE}",
    f"-dColorImageResolution={IMAGE_RESOLUTION}",
    f"-dGrayImageDownsampleType={DOWNSAMPLE_TYPE}",
    f"-dGrayImageResolution={IMAGE_RESOLUTION}",
    f"-dMonoImageDownsampleType={DOWNSAMPLE_TYPE}",
    f"-dMonoImageResolution={IMAGE_RESOLUTION}",
)

OUTPUT_FILE_FLAG = "-sOutputFile="

# =============================================================================
# Output Placement
# =============================================================================

DEFAULT_RENAME_SUFFIX = "shrunk"

# In-place mode writes to ".<name><TEMP_SUFFIX>" next to the original
TEMP_SUFFIX = ".tmp"

# =============================================================================
# Configuration
# =============================================================================

CONFIG_FILENAME = "pdfshrink.json"
CONFIG_ENV_VAR = "PDFSHRINK_CONFIG"
LOG_DIR_ENV_VAR = "PDFSHRINK_LOG_DIR"

# =============================================================================
# Logging
# =============================================================================

DEFAULT_LOG_LEVEL = "DEBUG"
# Built-in loguru levels accepted in the config file
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_ROTATION = "10 MB"
DEFAULT_LOG_RETENTION = "7 days"

CONSOLE_LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{message}</cyan>"
)
FILE_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <5} | {module}:{line: <3} | {message}"

# Console level per -v count; the last entry covers anything higher
VERBOSITY_LEVELS = ("INFO", "DEBUG", "TRACE")
