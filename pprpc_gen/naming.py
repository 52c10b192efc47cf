"""Naming conventions shared by the selector, resolver and emitter.

All of these are plain string rules so a misrouted identifier can be
diagnosed without running protoc:

  OrderService          -> OrderUseCase        (use-case dependency)
  CreateOrderParam(s)   -> use-case root       (request parameter)
  CreateOrderResponse   -> use-case root       (response payload)
  Widget                -> domain root         (shared domain type)
  order.services.proto  -> order.services_pprpc.pb.go
"""

from __future__ import annotations

import re

SERVICE_FILE_SUFFIX = "services.proto"
OUTPUT_FILE_SUFFIX = "_pprpc.pb.go"
WRAPPER_SUFFIX = "Rpc"

_SERVICE_MARKER = "Service"
_USE_CASE_MARKER = "UseCase"
_PARAM_SUFFIXES = ("Param", "Params")
_RESPONSE_SUFFIX = "Response"

_GO_KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer",
    "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
    "interface", "map", "package", "range", "return", "select", "struct",
    "switch", "type", "var",
})


def is_service_file(proto_name: str) -> bool:
    """Check whether a proto path carries the services marker."""
    return proto_name.endswith(SERVICE_FILE_SUFFIX)


def use_case_name(service_name: str) -> str:
    """Swap the first 'Service' marker for 'UseCase'.

    Names without the marker come back unchanged.
    """
    return service_name.replace(_SERVICE_MARKER, _USE_CASE_MARKER, 1)


def has_service_marker(service_name: str) -> bool:
    return _SERVICE_MARKER in service_name


def wrapper_name(service_name: str) -> str:
    return f"{service_name}{WRAPPER_SUFFIX}"


def is_param_type(type_name: str) -> bool:
    """Request types named *Param or *Params belong to the use-case layer."""
    return type_name.endswith(_PARAM_SUFFIXES)


def is_response_type(type_name: str) -> bool:
    """Response types named *Response belong to the use-case layer."""
    return type_name.endswith(_RESPONSE_SUFFIX)


def output_file_name(proto_name: str) -> str:
    """Build the generated file name from the proto path."""
    stem = proto_name[: -len(".proto")] if proto_name.endswith(".proto") else proto_name
    return f"{stem}{OUTPUT_FILE_SUFFIX}"


def go_camel_case(name: str) -> str:
    """Convert a proto name to the Go name protoc-gen-go would give it.

    Dots become underscores unless followed by a lower case letter, an
    underscore before a lower case letter is dropped and that letter is
    upper cased, and a leading underscore becomes 'X'.
    """
    out: list[str] = []
    i = 0
    while i < len(name):
        c = name[i]
        nxt = name[i + 1] if i + 1 < len(name) else ""
        if c == "." and _is_lower(nxt):
            pass
        elif c == ".":
            out.append("_")
        elif c == "_" and (i == 0 or name[i - 1] == "."):
            out.append("X")
        elif c == "_" and _is_lower(nxt):
            pass
        elif c.isdigit():
            out.append(c)
        else:
            out.append(c.upper() if _is_lower(c) else c)
            while i + 1 < len(name) and _is_lower(name[i + 1]):
                i += 1
                out.append(name[i])
        i += 1
    return "".join(out)


def go_sanitized(name: str) -> str:
    """Make a string usable as a Go identifier."""
    name = re.sub(r"\W", "_", name)
    if name in _GO_KEYWORDS or not name[:1].isalpha():
        return "_" + name
    return name


def import_path_base(import_path: str) -> str:
    """Return the last element of a Go import path."""
    return import_path.rstrip("/").rsplit("/", 1)[-1]


def go_package_name(import_path: str) -> str:
    """Derive a package name from the last element of an import path."""
    return go_sanitized(import_path_base(import_path))


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z"
