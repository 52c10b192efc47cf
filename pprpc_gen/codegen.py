"""Render generated units and assemble the output file set.

Takes the units from context_builder and produces Go source text, one
file per eligible schema file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import jinja2

from .config import PluginOptions
from .context_builder import GeneratedUnit, build_unit
from .model import SchemaFile
from .resolver import IdentifierResolver
from .selector import select_files

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "pprpc.go.j2"


@dataclass(frozen=True)
class OutputFile:
    name: str
    content: str


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def render_unit(unit: GeneratedUnit, env: jinja2.Environment | None = None) -> str:
    """Render one unit to Go source."""
    env = env or _environment()
    template = env.get_template(TEMPLATE_NAME)
    return template.render(unit=unit, q=unit.import_table.qualify)


def generate(files: Iterable[SchemaFile], options: PluginOptions) -> list[OutputFile]:
    """Select eligible files, build their units and render them in order."""
    selected = select_files(files)
    if not selected:
        logger.info("no *services.proto files to generate")
        return []

    resolver = IdentifierResolver(options.resolver_config())
    env = _environment()
    outputs = []
    for schema in selected:
        unit = build_unit(schema, resolver)
        outputs.append(OutputFile(unit.file_name, render_unit(unit, env)))
        logger.info(
            "Generated %s (%d services, %d methods)",
            unit.file_name,
            len(unit.wrappers),
            sum(len(w.adapters) for w in unit.wrappers),
        )
    return outputs
