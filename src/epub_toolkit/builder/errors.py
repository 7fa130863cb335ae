"""
Exceptions shared across the build pipeline.

BuildError is raised for anything that aborts synthesis. Lower-level
errors are chained with ``raise BuildError(...) from e``.
"""


class BuildError(Exception):
    """Error during build pipeline."""
    pass
