"""Plugin parameters and the resolver configuration built from them.

protoc passes parameters as one comma separated string:

  --go-pprpc_out=domainPath=pkg/domain,useCasePath=pkg/usecase,dtsPath=pkg/dts:.

M<proto>=<import path> entries override go_package for a file, the same
way protoc-gen-go treats them.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from .errors import ConfigError

logger = logging.getLogger(__name__)

DOMAIN_PATH = "domainPath"
USE_CASE_PATH = "useCasePath"
DTS_PATH = "dtsPath"

CONTEXT_IMPORT_PATH = "context"
TWIRP_IMPORT_PATH = "github.com/twitchtv/twirp"
FMT_IMPORT_PATH = "fmt"

LOG_LEVEL_ENV = "PPRPC_LOG_LEVEL"

_PATHS_MODES = {"import", "source_relative"}

# Accepted for compatibility with protoc-gen-go setups; they do not affect output.
_IGNORED_KEYS = {"module", "annotate_code"}


@dataclass(frozen=True)
class ResolverConfig:
    """The three configurable code-location roots."""

    domain_root: str
    use_case_root: str
    dts_root: str
    context_root: str = CONTEXT_IMPORT_PATH
    transport_root: str = TWIRP_IMPORT_PATH


@dataclass(frozen=True)
class PluginOptions:
    domain_root: str = ""
    use_case_root: str = ""
    dts_root: str = ""
    paths: str = "import"
    import_overrides: dict[str, str] = field(default_factory=dict)

    def resolver_config(self) -> ResolverConfig:
        """Return the resolver roots, failing if any was not supplied."""
        missing = [
            key for key, value in (
                (DOMAIN_PATH, self.domain_root),
                (USE_CASE_PATH, self.use_case_root),
                (DTS_PATH, self.dts_root),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"missing required parameter(s): {', '.join(missing)}")
        return ResolverConfig(
            domain_root=self.domain_root,
            use_case_root=self.use_case_root,
            dts_root=self.dts_root,
        )


def parse_parameter(parameter: str) -> PluginOptions:
    """Parse protoc's parameter string into PluginOptions."""
    roots: dict[str, str] = {}
    overrides: dict[str, str] = {}
    paths = "import"

    for item in parameter.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        if not sep and key not in _IGNORED_KEYS:
            raise ConfigError(f"parameter {item!r} is not of the form key=value")

        if key in (DOMAIN_PATH, USE_CASE_PATH, DTS_PATH):
            roots[key] = value
        elif key.startswith("M") and len(key) > 1:
            overrides[key[1:]] = value
        elif key == "paths":
            if value not in _PATHS_MODES:
                raise ConfigError(f"unknown paths mode {value!r}")
            paths = value
        elif key in _IGNORED_KEYS:
            logger.debug("ignoring parameter %s=%s", key, value)
        else:
            raise ConfigError(f"unknown parameter {key!r}")

    options = PluginOptions(
        domain_root=roots.get(DOMAIN_PATH, ""),
        use_case_root=roots.get(USE_CASE_PATH, ""),
        dts_root=roots.get(DTS_PATH, ""),
        paths=paths,
        import_overrides=overrides,
    )
    logger.debug("plugin options: %s", options)
    return options


def configure_logging() -> None:
    """Send log records to stderr; stdout carries the protoc response."""
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="protoc-gen-go-pprpc: %(levelname)s %(name)s: %(message)s",
    )
