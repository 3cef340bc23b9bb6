"""pdfshrink - shrink scanned PDF files with Ghostscript."""

__version__ = "0.2.0"
