"""Built-in sweeps, in the order a scan runs them."""

from cleanser.sweeps.base import DirectorySweep, FindingCollector, Sweep
from cleanser.sweeps.build_artifacts import BuildArtifactsSweep
from cleanser.sweeps.cache_dirs import CacheDirsSweep
from cleanser.sweeps.duplicates import DuplicatesSweep
from cleanser.sweeps.large_files import LargeFilesSweep
from cleanser.sweeps.log_files import LogFilesSweep


def default_sweeps() -> list[Sweep]:
    """Return fresh instances of the built-in sweeps in scan order."""
    return [
        CacheDirsSweep(),
        BuildArtifactsSweep(),
        LogFilesSweep(),
        LargeFilesSweep(),
        DuplicatesSweep(),
    ]


__all__ = [
    "BuildArtifactsSweep",
    "CacheDirsSweep",
    "DirectorySweep",
    "DuplicatesSweep",
    "FindingCollector",
    "LargeFilesSweep",
    "LogFilesSweep",
    "Sweep",
    "default_sweeps",
]
