"""Version information for github-tools.

Single source of truth for version number.
Follows PEP 440 and semantic versioning principles.
"""

__version__ = "0.3.0"
__version_info__ = tuple(int(part) for part in __version__.split("."))

# Version history:
# 0.3.0 - Tool registry, CLI host, quota snapshot action
# 0.2.0 - Fixed-interval request throttle, quota header tracking
# 0.1.0 - Initial release (repositories, issues, pull requests)
