"""Exceptions raised while turning a protoc request into adapter files.

Any PluginError aborts the whole generation pass; __main__ reports its
message back to protoc through the response error field.
"""

from __future__ import annotations


class PluginError(Exception):
    """Base class for errors reported to protoc."""


class ConfigError(PluginError):
    """A plugin parameter is malformed, unknown or missing."""


class SchemaError(PluginError):
    """The descriptor set breaks a contract the generator relies on."""
