"""
Environment operation generation for toolenv.

Modules:
    operations: Operation types and their serialized line form
    emitter: Operations for one plugin version
    builder: Ordered operations for a whole directory
"""

from .builder import EnvironmentBuilder
from .emitter import EnvironmentEmitter
from .operations import (
    EnvOperation,
    PathPrepend,
    SourceEnvScript,
    StatusMessage,
    WatchFile,
    parse_operation,
)

__all__ = [
    "EnvironmentBuilder",
    "EnvironmentEmitter",
    "EnvOperation",
    "PathPrepend",
    "SourceEnvScript",
    "StatusMessage",
    "WatchFile",
    "parse_operation",
]
