"""Share repair tooling version information.

Version numbering follows semantic versioning (semver.org).
"""

__version__ = "1.0.0"
