"""rowdiff-view - readable reports and inline cell diffs for database row comparisons."""

try:
    from importlib.metadata import version

    __version__ = version("rowdiff-view")
except Exception:
    __version__ = "unknown"
