"""Filesystem and process collaborators used by the generator."""

from cliforge.io.fs import FileWriter
from cliforge.io.process import ProcessResult, ProcessRunner

__all__ = [
    "FileWriter",
    "ProcessResult",
    "ProcessRunner",
]
