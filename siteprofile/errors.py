from __future__ import annotations


class ConfigError(Exception):
    """
    Error in the site configuration, found while loading or resolving it
    """
    pass
