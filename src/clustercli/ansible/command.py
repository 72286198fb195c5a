# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clustercli/ansible/command.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .params import encode_parameters
from .verbosity import verbosity_flag

DEFAULT_HOST_PATTERN = "all"
RAW_COMMAND_MODULE = "command"
BECOME_FLAGS = ["-K", "-b"]

UPDATE_PARAMETERS = {
    "update_cache": "yes",
    "autoremove": "yes",
    "force_apt_get": "yes",
    "upgrade": "yes",
}


@dataclass(frozen=True)
class NamedModule:
    name: str


@dataclass(frozen=True)
class RawCommand:
    command_line: str


Module = Union[NamedModule, RawCommand]


@dataclass
class AdhocCommand:
    """
    One ``ansible <pattern> -m <module> -a <args>`` call.

    Parameters keep insertion order so the generated argv is stable
    between runs.
    """

    module: Module
    needs_become: bool = False
    host_pattern: Optional[str] = None
    parameters: Dict[str, Optional[str]] = field(default_factory=dict)

    # ------------------------- constructors -------------------------

    @classmethod
    def named(cls, name: str, needs_become: bool = False, host_pattern: Optional[str] = None) -> "AdhocCommand":
        return cls(NamedModule(name), needs_become=needs_become, host_pattern=host_pattern)

    @classmethod
    def copy(cls, src: str, dest: str, needs_become: bool = False, host_pattern: Optional[str] = None) -> "AdhocCommand":
        """Copy a local file to the remote machines."""
        return (
            cls.named("copy", needs_become, host_pattern)
            .with_parameter("src", src)
            .with_parameter("dest", dest)
        )

    @classmethod
    def fetch(cls, src: str, dest: str, needs_become: bool = False, host_pattern: Optional[str] = None) -> "AdhocCommand":
        """Fetch a file from the remote machines."""
        return (
            cls.named("fetch", needs_become, host_pattern)
            .with_parameter("src", src)
            .with_parameter("dest", dest)
        )

    @classmethod
    def run(
        cls,
        command_line: str,
        needs_become: bool = False,
        host_pattern: Optional[str] = None,
        chdir: Optional[str] = None,
    ) -> "AdhocCommand":
        return cls(RawCommand(command_line), needs_become=needs_become, host_pattern=host_pattern).with_optional_parameter(
            "chdir", chdir
        )

    @classmethod
    def update(cls, host_pattern: Optional[str] = None) -> "AdhocCommand":
        cmd = cls.named("apt", True, host_pattern)
        for name, value in UPDATE_PARAMETERS.items():
            cmd.with_parameter(name, value)
        return cmd

    # ------------------------- builders -------------------------

    def with_parameter(self, name: str, value: Optional[str]) -> "AdhocCommand":
        self.parameters[name] = value
        return self

    def with_optional_parameter(self, name: str, value: Optional[str]) -> "AdhocCommand":
        if value is None:
            return self
        return self.with_parameter(name, value)

    # ------------------------- rendering -------------------------

    @property
    def module_name(self) -> str:
        if isinstance(self.module, RawCommand):
            return RAW_COMMAND_MODULE
        return self.module.name

    def arguments(self, inventory: Optional[str], verbose: int = 0) -> List[str]:
        """
        Arguments passed to ``ansible``, in a fixed order:
        verbosity, inventory, become flags, module, module args, host pattern.
        """
        args: List[str] = []

        flag = verbosity_flag(verbose)
        if flag:
            args.append(flag)

        if inventory:
            args += ["--inventory", str(inventory)]

        if self.needs_become:
            args += BECOME_FLAGS

        args += ["-m", self.module_name]

        prefix = self.module.command_line if isinstance(self.module, RawCommand) else None
        args += encode_parameters(self.parameters, prefix=prefix)

        args.append(self.host_pattern or DEFAULT_HOST_PATTERN)
        return args
