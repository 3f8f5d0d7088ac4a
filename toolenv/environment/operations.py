"""
Environment operations and their serialized line form.

Each operation renders to one line understood by a direnv-stdlib shell
layer. Arguments are quoted with ``shlex.quote`` so a rendered line always
parses back to the same operation.

    PATH_add /home/user/.asdf/installs/python/3.11.4/bin
    ASDF_INSTALL_TYPE=version ASDF_INSTALL_VERSION=3.11.4 ASDF_INSTALL_PATH=... source_env .../bin/exec-env
    watch_file /home/user/project/.tool-versions
    log_status 'using asdf python 3.11.4'
"""

import shlex
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class PathPrepend:
    """Prepend a directory to PATH."""

    path: str

    def render(self) -> str:
        return f"PATH_add {shlex.quote(self.path)}"


@dataclass(frozen=True)
class SourceEnvScript:
    """Source a plugin's exec-env hook with its install metadata exported."""

    script: str
    install_type: str
    version: str
    install_path: str

    def render(self) -> str:
        return (
            f"ASDF_INSTALL_TYPE={shlex.quote(self.install_type)} "
            f"ASDF_INSTALL_VERSION={shlex.quote(self.version)} "
            f"ASDF_INSTALL_PATH={shlex.quote(self.install_path)} "
            f"source_env {shlex.quote(self.script)}"
        )


@dataclass(frozen=True)
class WatchFile:
    """Ask the watcher to reload when a file changes."""

    path: str

    def render(self) -> str:
        return f"watch_file {shlex.quote(self.path)}"


@dataclass(frozen=True)
class StatusMessage:
    """Print a status line."""

    text: str

    def render(self) -> str:
        return f"log_status {shlex.quote(self.text)}"


EnvOperation = Union[PathPrepend, SourceEnvScript, WatchFile, StatusMessage]

_METADATA_KEYS = ("ASDF_INSTALL_TYPE", "ASDF_INSTALL_VERSION", "ASDF_INSTALL_PATH")


def parse_operation(line: str) -> EnvOperation:
    """
    Parse a rendered operation line.

    Raises:
        ValueError: If the line is not a rendered operation
    """
    tokens = shlex.split(line)
    if not tokens:
        raise ValueError("Empty operation line")

    command, args = tokens[0], tokens[1:]
    if command == "PATH_add" and len(args) == 1:
        return PathPrepend(args[0])
    if command == "watch_file" and len(args) == 1:
        return WatchFile(args[0])
    if command == "log_status" and len(args) == 1:
        return StatusMessage(args[0])

    if len(tokens) == 5 and tokens[3] == "source_env":
        metadata = dict(token.split("=", 1) for token in tokens[:3] if "=" in token)
        if tuple(metadata) == _METADATA_KEYS:
            return SourceEnvScript(
                script=tokens[4],
                install_type=metadata["ASDF_INSTALL_TYPE"],
                version=metadata["ASDF_INSTALL_VERSION"],
                install_path=metadata["ASDF_INSTALL_PATH"],
            )

    raise ValueError(f"Unrecognized operation line: {line!r}")
