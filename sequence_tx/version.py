"""
Version of the installed sequence-tx distribution.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION = "sequence-tx"
FALLBACK_VERSION = "0.1.0"
PYPROJECT_PATH = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def _version_from_pyproject(path: pathlib.Path = PYPROJECT_PATH) -> str:
    """Read ``[project].version`` from a source checkout."""
    try:
        with open(path, "rb") as f:
            return tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        return FALLBACK_VERSION


try:
    __version__ = importlib.metadata.version(DISTRIBUTION)
except importlib.metadata.PackageNotFoundError:
    __version__ = _version_from_pyproject()
