"""Speak the protoc plugin protocol.

Reads a CodeGeneratorRequest, turns its file descriptors into the
generator's model and wraps generated files (or an error) into a
CodeGeneratorResponse.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterable, Iterator

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from .codegen import OutputFile
from .config import PluginOptions
from .errors import SchemaError
from .model import Method, SchemaFile, Service
from .naming import go_camel_case, go_package_name, is_service_file

logger = logging.getLogger(__name__)


def read_request(stream: BinaryIO) -> plugin_pb2.CodeGeneratorRequest:
    """Parse a serialized CodeGeneratorRequest from a binary stream."""
    request = plugin_pb2.CodeGeneratorRequest()
    request.ParseFromString(stream.read())
    return request


def write_response(response: plugin_pb2.CodeGeneratorResponse, stream: BinaryIO) -> None:
    stream.write(response.SerializeToString())
    stream.flush()


def build_response(
    outputs: Iterable[OutputFile] = (),
    error: str | None = None,
) -> plugin_pb2.CodeGeneratorResponse:
    """Build the response; an error replaces any generated files."""
    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    if error is not None:
        response.error = error
        return response
    for output in outputs:
        response.file.add(name=output.name, content=output.content)
    return response


def _walk_messages(
    messages: Iterable[descriptor_pb2.DescriptorProto],
    prefix: str = "",
) -> Iterator[str]:
    """Yield dotted names of messages relative to their package, nested included."""
    for message in messages:
        name = f"{prefix}{message.name}"
        yield name
        yield from _walk_messages(message.nested_type, f"{name}.")


def message_go_names(
    protos: Iterable[descriptor_pb2.FileDescriptorProto],
) -> dict[str, str]:
    """Map fully qualified message names (.pkg.Msg) to their Go names."""
    names: dict[str, str] = {}
    for proto in protos:
        package = f".{proto.package}." if proto.package else "."
        for relative in _walk_messages(proto.message_type):
            names[f"{package}{relative}"] = go_camel_case(relative)
    return names


def go_import_path(
    proto: descriptor_pb2.FileDescriptorProto,
    options: PluginOptions,
) -> tuple[str, str]:
    """Return (import path, package name) for a file.

    An M<file>=<path> parameter wins over the go_package option. Either may
    name the package explicitly after a ';'.
    """
    spec = options.import_overrides.get(proto.name) or proto.options.go_package
    if not spec:
        return "", ""
    path, _, package = spec.partition(";")
    return path, package or go_package_name(path)


def _service(
    proto: descriptor_pb2.ServiceDescriptorProto,
    messages: dict[str, str],
    file_name: str,
) -> Service:
    methods = []
    for method in proto.method:
        try:
            input_type = messages[method.input_type]
            output_type = messages[method.output_type]
        except KeyError as e:
            raise SchemaError(
                f"{file_name}: {proto.name}.{method.name} references unknown message {e.args[0]}"
            ) from e
        methods.append(Method(
            name=go_camel_case(method.name),
            input_type=input_type,
            output_type=output_type,
        ))
    return Service(name=go_camel_case(proto.name), methods=tuple(methods))


def load_files(
    request: plugin_pb2.CodeGeneratorRequest,
    options: PluginOptions,
) -> list[SchemaFile]:
    """Convert every file in the request to a SchemaFile, in request order."""
    to_generate = set(request.file_to_generate)
    messages = message_go_names(request.proto_file)
    files = []

    for proto in request.proto_file:
        generate = proto.name in to_generate
        import_path, package = go_import_path(proto, options)
        if not import_path and generate and is_service_file(proto.name):
            raise SchemaError(
                f"unable to determine Go import path for {proto.name!r}: "
                "set option go_package or pass M" + proto.name + "=<import path>"
            )
        files.append(SchemaFile(
            name=proto.name,
            generate=generate,
            go_import_path=import_path,
            go_package_name=package,
            services=tuple(_service(s, messages, proto.name) for s in proto.service),
        ))
        logger.debug("loaded %s (generate=%s, import path %r)", proto.name, generate, import_path)

    return files
