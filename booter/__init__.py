"""booter — unpack a submission, install every sub-project, boot them all."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("booter")
except PackageNotFoundError:
    __version__ = "0.1.0"  # fallback for development
