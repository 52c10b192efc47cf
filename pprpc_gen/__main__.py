"""Entry point: protoc-gen-go-pprpc (or python -m pprpc_gen)

Reads a CodeGeneratorRequest on stdin, writes a CodeGeneratorResponse
on stdout.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO

from google.protobuf.message import DecodeError

from . import __version__
from .codegen import generate
from .config import configure_logging, parse_parameter
from .errors import PluginError
from .loader import build_response, load_files, read_request, write_response

logger = logging.getLogger(__name__)


def run(stdin: BinaryIO, stdout: BinaryIO) -> int:
    """Run one generation pass. Returns the process exit status."""
    try:
        request = read_request(stdin)
    except DecodeError as e:
        logger.error("cannot decode CodeGeneratorRequest: %s", e)
        return 1

    try:
        options = parse_parameter(request.parameter)
        files = load_files(request, options)
        response = build_response(generate(files, options))
    except PluginError as e:
        logger.error("%s", e)
        response = build_response(error=str(e))

    write_response(response, stdout)
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="protoc-gen-go-pprpc",
        description="protoc plugin: run via protoc --go-pprpc_out=...",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.parse_args(argv)

    configure_logging()
    sys.exit(run(sys.stdin.buffer, sys.stdout.buffer))


if __name__ == "__main__":
    main()
