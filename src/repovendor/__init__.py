"""
repovendor - import path resolution and revision-pinned checkouts

repovendor maps a bare import path to the git, Mercurial or Bazaar
repository that hosts it, checks it out into a throwaway working copy and
records the result in a vendor manifest.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
