"""Level quantization, tuple ids and the tuple container."""

from .level_tuple import LevelTuple
from .metadata import ColumnMetaData
from .quantizer import (
    compute_multipliers,
    decode_id,
    encode_id,
    id_space_size,
    quantize,
    to_level,
)

__all__ = [
    "LevelTuple",
    "ColumnMetaData",
    "compute_multipliers",
    "decode_id",
    "encode_id",
    "id_space_size",
    "quantize",
    "to_level",
]
