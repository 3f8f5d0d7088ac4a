"""
toolenv - cached environments for .tool-versions directories.

Resolves the PATH and hook operations implied by an asdf ``.tool-versions``
file and caches them per directory so direnv can apply them cheaply.
"""

try:
    from importlib.metadata import version

    __version__ = version("toolenv")
except Exception:
    __version__ = "0.1.0"
