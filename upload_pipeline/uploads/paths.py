from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from upload_pipeline.uploads.aliases import AliasResolver
from upload_pipeline.uploads.exceptions import ConfigurationError
from upload_pipeline.uploads.models import DynamicPath, PathExpr, StaticPath


def normalize_directory(path: str) -> str:
    """Strip trailing slashes and append exactly one."""
    return path.rstrip("/") + "/"


def resolve_directory(
    path: PathExpr,
    attributes: Mapping[str, Any],
    aliases: AliasResolver,
) -> str:
    """Turn a step's path expression into a directory string.

    Static expressions are alias-expanded and normalized to a single trailing
    slash. Dynamic expressions receive a read-only view of ``attributes`` and
    their return value is used as-is.
    """
    if isinstance(path, StaticPath):
        return normalize_directory(aliases.resolve(path.expression))
    if isinstance(path, DynamicPath):
        return path.func(MappingProxyType(dict(attributes)))
    raise ConfigurationError(
        "Param `path` must be a string or a callable returning the directory"
    )
