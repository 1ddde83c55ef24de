"""mounttool - toggle a gocryptfs encrypted folder from the desktop."""

from mounttool.core.version import VERSION

__version__ = VERSION

__all__ = ["VERSION", "__version__"]
