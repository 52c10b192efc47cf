"""Resolve bare names to Go identifiers and qualify them per output file.

Resolution only decides which import path an identifier lives in. Turning
that into ``alias.Name`` and the import block is the ImportTable's job, one
table per generated file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .config import ResolverConfig
from .model import GoIdent
from .naming import go_package_name, is_param_type, is_response_type

logger = logging.getLogger(__name__)

CONTEXT_TYPE = "Context"
TRANSFORM_FUNC = "Transform"


class Role(Enum):
    DOMAIN = "domain"
    USE_CASE = "use_case"
    CONTEXT = "context"
    TRANSFORM = "transform"
    REQUEST_PARAM = "request_param"
    RESPONSE_PAYLOAD = "response_payload"


class IdentifierResolver:
    """Bind names to the domain, use-case or data-transform root.

    Request and response types carry no role metadata in the descriptors,
    so their suffix is the only signal: *Param/*Params and *Response live in
    the use-case layer, anything else is a shared domain type.
    """

    def __init__(self, config: ResolverConfig) -> None:
        self.config = config

    def resolve(self, name: str, role: Role) -> GoIdent:
        if role is Role.DOMAIN:
            return GoIdent(name, self.config.domain_root)
        if role is Role.USE_CASE:
            return GoIdent(name, self.config.use_case_root)
        if role is Role.CONTEXT:
            return GoIdent(CONTEXT_TYPE, self.config.context_root)
        if role is Role.TRANSFORM:
            return GoIdent(TRANSFORM_FUNC, self.config.dts_root)
        if role is Role.REQUEST_PARAM:
            return self._by_suffix(name, is_param_type(name), role)
        if role is Role.RESPONSE_PAYLOAD:
            return self._by_suffix(name, is_response_type(name), role)
        raise ValueError(f"unknown role {role!r}")

    def _by_suffix(self, name: str, use_case: bool, role: Role) -> GoIdent:
        if use_case:
            return GoIdent(name, self.config.use_case_root)
        logger.debug("%s %s has no use-case suffix, using domain root %s",
                     role.value, name, self.config.domain_root)
        return GoIdent(name, self.config.domain_root)


@dataclass(frozen=True)
class GoImport:
    alias: str
    path: str


# Local names the emitted code declares and Go's predeclared identifiers;
# an import alias must not shadow them.
_RESERVED_NAMES = frozenset({
    "service", "err", "pbIn", "pbOut", "ucIn", "ucOut", "twerr", "domainErr", "ok",
    "any", "bool", "byte", "comparable", "complex64", "complex128", "error",
    "float32", "float64", "int", "int8", "int16", "int32", "int64", "rune",
    "string", "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
    "true", "false", "iota", "nil",
    "append", "cap", "clear", "close", "complex", "copy", "delete", "imag",
    "len", "make", "max", "min", "new", "panic", "print", "println", "real",
    "recover",
})


class ImportTable:
    """Qualify identifiers for one generated Go file.

    Identifiers in the file's own package and builtins stay bare. Every
    other import path gets an alias on first use: its sanitized last path
    element, suffixed with 1, 2, ... if another path already took it.
    """

    def __init__(self, local_import_path: str) -> None:
        self.local_import_path = local_import_path
        self._aliases: dict[str, str] = {}
        self._taken: set[str] = set(_RESERVED_NAMES)

    def add(self, import_path: str) -> str:
        """Register an import path and return its alias."""
        alias = self._aliases.get(import_path)
        if alias is not None:
            return alias
        base = go_package_name(import_path)
        alias = base
        n = 1
        while alias in self._taken:
            alias = f"{base}{n}"
            n += 1
        self._aliases[import_path] = alias
        self._taken.add(alias)
        return alias

    def qualify(self, ident: GoIdent) -> str:
        if not ident.import_path or ident.import_path == self.local_import_path:
            return ident.name
        return f"{self.add(ident.import_path)}.{ident.name}"

    def imports(self) -> tuple[GoImport, ...]:
        """Return the registered imports sorted by path."""
        return tuple(
            GoImport(alias, path) for path, alias in sorted(self._aliases.items())
        )
