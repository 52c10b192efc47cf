"""Read-only input model handed to the generator.

Built once by the loader from protoc's descriptors and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GoIdent:
    """A Go identifier and the import path it lives in.

    An empty import path means a builtin such as ``error``.
    """

    name: str
    import_path: str = ""


@dataclass(frozen=True)
class Method:
    name: str
    input_type: str
    output_type: str


@dataclass(frozen=True)
class Service:
    name: str
    methods: tuple[Method, ...] = ()


@dataclass(frozen=True)
class SchemaFile:
    """One parsed .proto file and where its Go code lives."""

    name: str
    generate: bool
    go_import_path: str
    go_package_name: str
    services: tuple[Service, ...] = ()
