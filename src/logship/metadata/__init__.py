"""
Build metadata: the bundle attached to every delivery and the collaborators
that produce it.
"""

from logship.metadata.bundle import BuildMetadata
from logship.metadata.host import SettingsHostLocator, StaticHostLocator
from logship.metadata.provider import EnvironmentMetadataProvider

__all__ = [
    "BuildMetadata",
    "EnvironmentMetadataProvider",
    "SettingsHostLocator",
    "StaticHostLocator",
]
