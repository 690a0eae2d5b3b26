"""TOML input and output of graph and plugin documents."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import BaseModel, ValidationError

from ._graph import MappingDataSource
from ._plugins import PluginInfo

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class GraphFileError(Exception):
    """Error reading a graph or plugin document."""


class GraphDocument(BaseModel):
    """Schema of a graph document.

    ``graph`` maps each node name to the names it points to; ``roots`` are
    optional traversal entry points.
    """

    roots: list[str] | None = None
    graph: dict[str, list[str]] = {}


class PluginDocument(BaseModel):
    """Schema of a plugin document (a ``[[plugins]]`` array of tables)."""

    plugins: list[PluginInfo] = []


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise GraphFileError(msg) from e
    except OSError as e:
        msg = f"Cannot read {path}: {e}"
        raise GraphFileError(msg) from e


def _serialize_value(value: Any) -> Any:
    """Recursively serialize a value for TOML export.

    Handles:
    - Pydantic BaseModel: Converts to dict via model_dump()
    - dict: Recursively serializes values, dropping None
    - list/tuple: Recursively serializes items
    - Path: Converts to string
    """
    if isinstance(value, BaseModel):
        return _serialize_value(value.model_dump(mode="python", exclude_none=True))

    # TOML has no null
    if isinstance(value, dict):
        return {str(k): _serialize_value(v) for k, v in value.items() if v is not None}

    if isinstance(value, (list, tuple)):
        return [_serialize_value(item) for item in value]

    if isinstance(value, Path):
        return str(value)

    return value


def graph_document_to_source(document: GraphDocument) -> MappingDataSource[str]:
    """Convert a validated graph document into a data source."""
    return MappingDataSource.from_mapping(document.graph, document.roots)


def load_graph_from_toml(input_path: Path | str) -> MappingDataSource[str]:
    """Load a graph document from a TOML file.

    Args:
        input_path: Path to the TOML file.

    Returns:
        A data source over the declared graph.

    Raises:
        GraphFileError: If the file cannot be read or is not a valid graph document.

    """
    input_path = Path(input_path)
    contents = _load_toml(input_path)

    try:
        document = GraphDocument.model_validate(contents)
    except ValidationError as e:
        msg = f"Invalid graph document {input_path}: {e}"
        raise GraphFileError(msg) from e

    source = graph_document_to_source(document)
    logger.debug(f"Loaded graph with {len(source)} nodes from {input_path}")
    return source


def load_plugins_from_toml(input_path: Path | str) -> list[PluginInfo]:
    """Load plugin descriptors from a TOML file, in declaration order.

    Raises:
        GraphFileError: If the file cannot be read or is not a valid plugin document.

    """
    input_path = Path(input_path)
    contents = _load_toml(input_path)

    try:
        document = PluginDocument.model_validate(contents)
    except ValidationError as e:
        msg = f"Invalid plugin document {input_path}: {e}"
        raise GraphFileError(msg) from e

    logger.debug(f"Loaded {len(document.plugins)} plugins from {input_path}")
    return document.plugins


def export_order_to_toml(order: Sequence[Any], output_path: Path | str) -> None:
    """Write a sorted sequence to a TOML file as ``order = [...]``.

    Args:
        order: The sorted values.
        output_path: Path to the output TOML file. Parent directories are created.

    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("wb") as f:
        tomli_w.dump({"order": _serialize_value(order)}, f)

    logger.debug(f"Exported order to {output_path}")
