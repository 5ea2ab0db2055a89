"""SafeFormatter - erase and reformat removable USB and SD media."""

from importlib.metadata import PackageNotFoundError, version


try:
    __version__ = version("safeformatter")
except PackageNotFoundError:
    __version__ = "0.0.0"


__all__ = ["__version__"]
