"""Build the structured description of one generated adapter file.

Each eligible schema file becomes a GeneratedUnit: a wrapper type per
service, an adapter per method and the shared error translator. Adapter
bodies are tuples of step descriptors, so their order and error handling
can be checked without reading Go text. codegen.py turns a unit into
source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .config import FMT_IMPORT_PATH
from .model import GoIdent, Method, SchemaFile, Service
from .naming import has_service_marker, output_file_name, use_case_name, wrapper_name
from .resolver import GoImport, IdentifierResolver, ImportTable, Role

logger = logging.getLogger(__name__)

USE_CASE_FIELD = "UseCase"
TRANSLATOR_NAME = "transformTwirpError"
DOMAIN_CODE_META_KEY = "domainCode"
DOMAIN_ERROR_TYPE = "Error"

ERROR_TYPE = GoIdent("error")


class StepKind(str, Enum):
    DECLARE = "declare"
    TRANSFORM = "transform"
    INVOKE = "invoke"
    RETURN = "return"


class ErrorPath(str, Enum):
    """How a failed call hands its error back to the transport."""

    RAW = "raw"
    TRANSLATED = "translated"


@dataclass(frozen=True)
class TypeRef:
    ident: GoIdent
    pointer: bool = False


@dataclass(frozen=True)
class Slot:
    name: str
    type: TypeRef


@dataclass(frozen=True)
class Declare:
    slots: tuple[Slot, ...]
    kind: StepKind = StepKind.DECLARE


@dataclass(frozen=True)
class Transform:
    """Call the data-transform function from one slot into another."""

    func: GoIdent
    source: str
    target: str
    on_error: ErrorPath = ErrorPath.RAW
    kind: StepKind = StepKind.TRANSFORM


@dataclass(frozen=True)
class Invoke:
    """Call the use-case method of the same name."""

    method: str
    arg: str
    target: str
    on_error: ErrorPath = ErrorPath.TRANSLATED
    kind: StepKind = StepKind.INVOKE


@dataclass(frozen=True)
class Return:
    value: str
    kind: StepKind = StepKind.RETURN


Step = Union[Declare, Transform, Invoke, Return]


@dataclass(frozen=True)
class Adapter:
    receiver: str
    name: str
    context: GoIdent
    input: TypeRef
    output: TypeRef
    body: tuple[Step, ...]


@dataclass(frozen=True)
class Wrapper:
    name: str
    use_case: GoIdent
    adapters: tuple[Adapter, ...]
    field: str = USE_CASE_FIELD


@dataclass(frozen=True)
class ErrorTranslator:
    """Wraps any error as an internal twirp error.

    Errors whose dynamic type is the domain error type also carry their
    numeric code under meta_key. The type assertion keeps a domain type that
    does not implement error a compile failure of the generated file.
    """

    transport_error: GoIdent
    new_error: GoIdent
    internal_code: GoIdent
    wrap_error: GoIdent
    sprintf: GoIdent
    domain_error: GoIdent
    name: str = TRANSLATOR_NAME
    meta_key: str = DOMAIN_CODE_META_KEY


@dataclass(frozen=True)
class GeneratedUnit:
    source: str
    file_name: str
    package_name: str
    wrappers: tuple[Wrapper, ...]
    translator: ErrorTranslator
    import_table: ImportTable

    @property
    def imports(self) -> tuple[GoImport, ...]:
        return self.import_table.imports()


class _UnitBuilder:
    """Resolves identifiers for one file, registering each import as it goes."""

    def __init__(self, schema: SchemaFile, resolver: IdentifierResolver) -> None:
        self.schema = schema
        self.resolver = resolver
        self.table = ImportTable(schema.go_import_path)

    def ref(self, ident: GoIdent) -> GoIdent:
        self.table.qualify(ident)
        return ident

    def resolve(self, name: str, role: Role) -> GoIdent:
        return self.ref(self.resolver.resolve(name, role))

    def local(self, name: str) -> GoIdent:
        return GoIdent(name, self.schema.go_import_path)

    def translator(self) -> ErrorTranslator:
        transport = self.resolver.config.transport_root
        return ErrorTranslator(
            sprintf=self.ref(GoIdent("Sprintf", FMT_IMPORT_PATH)),
            transport_error=self.ref(GoIdent("Error", transport)),
            new_error=self.ref(GoIdent("NewError", transport)),
            internal_code=self.ref(GoIdent("Internal", transport)),
            wrap_error=self.ref(GoIdent("WrapError", transport)),
            domain_error=self.resolve(DOMAIN_ERROR_TYPE, Role.DOMAIN),
        )

    def wrapper(self, service: Service) -> Wrapper:
        if not has_service_marker(service.name):
            logger.warning(
                "%s: service %s has no 'Service' marker, use-case type keeps its name",
                self.schema.name, service.name,
            )
        name = wrapper_name(service.name)
        use_case = self.resolve(use_case_name(service.name), Role.USE_CASE)
        adapters = tuple(self.adapter(name, m) for m in service.methods)
        return Wrapper(name=name, use_case=use_case, adapters=adapters)

    def adapter(self, receiver: str, method: Method) -> Adapter:
        context = self.resolve("", Role.CONTEXT)
        transform = self.resolve("", Role.TRANSFORM)
        pb_in = self.local(method.input_type)
        pb_out = self.local(method.output_type)

        body: tuple[Step, ...] = (
            Declare((
                Slot("err", TypeRef(ERROR_TYPE)),
                Slot("ucIn", TypeRef(self.resolve(method.input_type, Role.REQUEST_PARAM))),
                Slot("ucOut", TypeRef(
                    self.resolve(method.output_type, Role.RESPONSE_PAYLOAD), pointer=True,
                )),
                Slot("pbOut", TypeRef(pb_out)),
            )),
            Transform(transform, source="pbIn", target="ucIn"),
            Invoke(method.name, arg="ucIn", target="ucOut"),
            Transform(transform, source="ucOut", target="pbOut"),
            Return("pbOut"),
        )
        return Adapter(
            receiver=receiver,
            name=method.name,
            context=context,
            input=TypeRef(pb_in, pointer=True),
            output=TypeRef(pb_out, pointer=True),
            body=body,
        )


def build_unit(schema: SchemaFile, resolver: IdentifierResolver) -> GeneratedUnit:
    """Build the GeneratedUnit for one eligible schema file."""
    builder = _UnitBuilder(schema, resolver)
    translator = builder.translator()
    wrappers = tuple(builder.wrapper(s) for s in schema.services)
    return GeneratedUnit(
        source=schema.name,
        file_name=output_file_name(schema.name),
        package_name=schema.go_package_name,
        wrappers=wrappers,
        translator=translator,
        import_table=builder.table,
    )
