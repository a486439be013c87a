"""GitHub profile summary cards rendered as SVG."""

from .app import create_app
from .config import Settings

__version__ = "0.1.0"

__all__ = ["Settings", "create_app", "__version__"]
