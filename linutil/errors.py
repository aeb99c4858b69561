from __future__ import annotations


class LinutilError(Exception):
    """Base for fatal setup errors (build and platform preconditions)."""


class BuildError(LinutilError):
    pass


class PlatformError(LinutilError):
    pass
