"""
deptree-rdf - Configuration package.
"""

from .settings import Settings, get_settings, load_config, reset_settings

__all__ = ["Settings", "get_settings", "load_config", "reset_settings"]
