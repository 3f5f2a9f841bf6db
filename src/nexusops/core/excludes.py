"""Directories the project walker never descends into.

Tier 0 (HARDCODED_DIRS): Never traversed, not configurable.
    - VCS internals and nexus-ops' own data directory

Tier 1 (DEFAULT_PRUNABLE_DIRS): Skipped only when opted in.
    - Dependency caches and build outputs that hold generated or vendored
      sources. Enable with ``walk.use_default_excludes: true``; off by
      default because `build` or `bin` can be a real package directory.
"""

from __future__ import annotations

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        # nexus-ops data
        ".nexusops",
    )
)

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # -------------------------------------------------------------------------
        # JVM ecosystem (Java, Kotlin, Groovy)
        # -------------------------------------------------------------------------
        "target",  # Maven build output
        "build",  # Gradle build output
        ".gradle",  # Gradle cache
        ".m2",  # Maven local repo
        ".kotlin",  # Kotlin compiler daemon data
        # -------------------------------------------------------------------------
        # .NET ecosystem
        # -------------------------------------------------------------------------
        "bin",
        "obj",
        "packages",  # NuGet packages (older style)
        # -------------------------------------------------------------------------
        # JavaScript tooling that often sits beside JVM projects
        # -------------------------------------------------------------------------
        "node_modules",
        # -------------------------------------------------------------------------
        # IDE state
        # -------------------------------------------------------------------------
        ".idea",
        ".vscode",
        ".settings",
    )
)


def build_prune_set(
    extra: list[str] | tuple[str, ...] = (),
    *,
    use_defaults: bool = True,
) -> frozenset[str]:
    """Combine the hardcoded tier, optionally the default tier, and extras."""
    dirs = set(HARDCODED_DIRS)
    if use_defaults:
        dirs |= DEFAULT_PRUNABLE_DIRS
    dirs.update(d.strip("/") for d in extra if d.strip("/"))
    return frozenset(dirs)
