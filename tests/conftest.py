"""Shared fixtures: descriptor protos and requests built in memory.

Nothing here needs protoc; the tests hand the plugin the same messages
protoc would send.
"""

from __future__ import annotations

from typing import Iterable

import pytest
from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from pprpc_gen.config import PluginOptions, ResolverConfig
from pprpc_gen.model import Method, SchemaFile, Service
from pprpc_gen.resolver import IdentifierResolver

DOMAIN_ROOT = "pkg/domain"
USE_CASE_ROOT = "pkg/usecase"
DTS_ROOT = "pkg/dts"
ORDER_IMPORT_PATH = "example.com/shop/gen/orderpb"
ROOTS_PARAMETER = f"domainPath={DOMAIN_ROOT},useCasePath={USE_CASE_ROOT},dtsPath={DTS_ROOT}"


# ---------------------------------------------------------------------------
# Descriptor builders
# ---------------------------------------------------------------------------

def make_proto(
    name: str,
    package: str = "shop.order.v1",
    go_package: str | None = ORDER_IMPORT_PATH,
    messages: Iterable[str] = (),
    services: Iterable[tuple[str, Iterable[tuple[str, str, str]]]] = (),
) -> descriptor_pb2.FileDescriptorProto:
    """Build a FileDescriptorProto.

    services is a list of (service name, [(method, input, output), ...]);
    input and output are message names in the same package.
    """
    proto = descriptor_pb2.FileDescriptorProto(name=name, package=package, syntax="proto3")
    if go_package:
        proto.options.go_package = go_package
    for message in messages:
        proto.message_type.add(name=message)
    for service_name, methods in services:
        service = proto.service.add(name=service_name)
        for method_name, input_type, output_type in methods:
            service.method.add(
                name=method_name,
                input_type=f".{package}.{input_type}",
                output_type=f".{package}.{output_type}",
            )
    return proto


def make_request(
    protos: Iterable[descriptor_pb2.FileDescriptorProto],
    to_generate: Iterable[str],
    parameter: str = ROOTS_PARAMETER,
) -> plugin_pb2.CodeGeneratorRequest:
    request = plugin_pb2.CodeGeneratorRequest(parameter=parameter)
    request.proto_file.extend(protos)
    request.file_to_generate.extend(to_generate)
    return request


def order_proto() -> descriptor_pb2.FileDescriptorProto:
    return make_proto(
        "order.services.proto",
        messages=["CreateOrderParam", "CreateOrderResponse"],
        services=[("OrderService", [("CreateOrder", "CreateOrderParam", "CreateOrderResponse")])],
    )


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> ResolverConfig:
    return ResolverConfig(domain_root=DOMAIN_ROOT, use_case_root=USE_CASE_ROOT, dts_root=DTS_ROOT)


@pytest.fixture
def options() -> PluginOptions:
    return PluginOptions(domain_root=DOMAIN_ROOT, use_case_root=USE_CASE_ROOT, dts_root=DTS_ROOT)


@pytest.fixture
def resolver(config) -> IdentifierResolver:
    return IdentifierResolver(config)


@pytest.fixture
def order_file() -> SchemaFile:
    """order.services.proto with OrderService.CreateOrder."""
    return SchemaFile(
        name="order.services.proto",
        generate=True,
        go_import_path=ORDER_IMPORT_PATH,
        go_package_name="orderpb",
        services=(
            Service(
                name="OrderService",
                methods=(Method("CreateOrder", "CreateOrderParam", "CreateOrderResponse"),),
            ),
        ),
    )
