"""Sweep for dependency and build output directories."""

from __future__ import annotations

from pathlib import Path

from cleanser.core.classifier import Classification, classify_build_artifact
from cleanser.sweeps.base import DirectorySweep


class BuildArtifactsSweep(DirectorySweep):
    """Finds node_modules, Cargo targets, build/dist output and tool caches.

    Generic names like ``build`` or ``target`` only count when the parent
    directory holds a matching project manifest.
    """

    id = "build_artifacts"
    name = "Build artifacts"

    def match(self, path: Path, root: Path) -> Classification | None:
        return classify_build_artifact(path)

    def describe(self, path: Path) -> str:
        return f"{path.name} directory"
