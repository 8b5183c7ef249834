"""Version information for git-wk."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("git-wk")
except PackageNotFoundError:
    # Running from a source checkout without an installed distribution
    __version__ = "0.0.0+unknown"
