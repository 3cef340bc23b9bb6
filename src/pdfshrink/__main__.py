"""Allow running as ``python -m pdfshrink``."""

from pdfshrink.cli import app

if __name__ == "__main__":
    app()
