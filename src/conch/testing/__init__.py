"""Test utilities for conch shells.

Provides an in-memory response writer and a runner that drives a shell
with captured streams::

    from conch.testing import RecordingWriter, ShellRunner
"""

from conch.testing.runner import ShellResult, ShellRunner
from conch.testing.writer import RecordingWriter

__all__ = [
    "RecordingWriter",
    "ShellResult",
    "ShellRunner",
]
