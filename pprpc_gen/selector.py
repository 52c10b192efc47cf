"""Pick the schema files that get an adapter file."""

from __future__ import annotations

from typing import Iterable

from .model import SchemaFile
from .naming import is_service_file


def select_files(files: Iterable[SchemaFile]) -> list[SchemaFile]:
    """Keep files protoc asked for whose name ends in 'services.proto'.

    Input order is preserved. A services file protoc did not ask to
    generate is skipped without complaint.
    """
    return [f for f in files if f.generate and is_service_file(f.name)]
