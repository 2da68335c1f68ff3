"""Release metadata resolution components for releasenfo.

This package contains modules for resolving release title, reference URL and
source platform from caller input, filename heuristics and remote lookups
(TMDB, TVmaze).
"""

from releasenfo.metadata.resolver import ReleaseMetadataResolver

__all__ = ["ReleaseMetadataResolver"]
