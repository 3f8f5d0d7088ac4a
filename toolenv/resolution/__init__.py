"""
Plugin and version resolution for toolenv.

Modules:
    version_manager: Version manager capability interface and asdf backend
    versions_file: Declaration file lookup and parsing
    plugins: Installed plugin enumeration
    resolver: Per-plugin version resolution
"""

from .plugins import global_only_plugins, list_installed_plugins
from .resolver import (
    SYSTEM_VERSION,
    PluginResolution,
    VersionResolver,
    split_latest,
)
from .version_manager import (
    INSTALL_TYPE_VERSION,
    AsdfVersionManager,
    VersionManager,
    find_asdf_executable,
)
from .versions_file import (
    VersionDeclaration,
    declared_plugins,
    find_versions_file,
    parse_declaration_text,
    parse_declarations,
)

__all__ = [
    "global_only_plugins",
    "list_installed_plugins",
    "SYSTEM_VERSION",
    "PluginResolution",
    "VersionResolver",
    "split_latest",
    "INSTALL_TYPE_VERSION",
    "AsdfVersionManager",
    "VersionManager",
    "find_asdf_executable",
    "VersionDeclaration",
    "declared_plugins",
    "find_versions_file",
    "parse_declaration_text",
    "parse_declarations",
]
