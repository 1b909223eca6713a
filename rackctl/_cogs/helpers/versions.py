"""
Detecting the client's own version.

The version is not hard-coded in the modules: it is taken from the installed
distribution's metadata once, when the code is loaded. It is used mostly
to self-identify in the ``User-Agent`` header and in ``rackctl --version``.
"""
import importlib.metadata

version: str | None = None

try:
    name, *_ = __name__.split('.')  # usually "rackctl", unless renamed/forked.
    version = importlib.metadata.version(name)
except importlib.metadata.PackageNotFoundError:
    pass  # running from a source tree without installation.
