"""
Output tree of the dump tool.

Each block gets its own directory "g<partition>b<NN>" under the output root.
Any OSError while creating directories or writing files is converted to a
StorageError, which aborts the whole invocation.
"""

import base64
import logging
from enum import Enum
from pathlib import Path
from typing import Any

import orjson

from ..blocks.models import Block
from ..errors import StorageError

JSON_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS


def json_default(obj: Any) -> Any:
    """Serialize types orjson does not handle natively."""
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if hasattr(obj, "_asdict"):
        return obj._asdict()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def dumps(obj: Any) -> bytes:
    """Render obj as indented JSON bytes."""
    return orjson.dumps(obj, default=json_default, option=JSON_OPTIONS)


def block_dir_name(partition: int, index: int) -> str:
    return f"g{partition}b{index:02d}"


class DumpWriter:
    """Writes export files for blocks below one output root."""

    def __init__(self, out_dir: str | Path):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.out_dir = Path(out_dir)

    def block_dir(self, block: Block) -> Path:
        """Create (if needed) and return the directory of a block.

        Raises:
            StorageError: If the directory cannot be created
        """
        path = self.out_dir / block_dir_name(block.partition, block.index)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"failed to create {path}: {e}") from e
        return path

    def write_bytes(self, block: Block, name: str, data: bytes) -> Path:
        path = self.block_dir(block) / name
        try:
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"failed to write {path}: {e}") from e
        self.logger.debug(f"Wrote {path} ({len(data)} bytes)")
        return path

    def write_json(self, block: Block, name: str, obj: Any) -> Path:
        """Write obj as JSON.

        Raises:
            StorageError: If the file cannot be written
            TypeError: If obj contains a value that cannot be serialized
        """
        return self.write_bytes(block, name, dumps(obj))

    def write_text(self, block: Block, name: str, text: str) -> Path:
        return self.write_bytes(block, name, text.encode("utf-8"))

    def write_raw_sections(self, block: Block) -> None:
        """Write encsection.bin and plainsection.bin."""
        self.write_bytes(block, "encsection.bin", bytes(block.body.enc_section))
        self.write_bytes(block, "plainsection.bin", bytes(block.body.plain_section))

    def write_meta(self, block: Block) -> None:
        self.write_json(block, "meta.json", block.meta())
