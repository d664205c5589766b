"""
Request serialization and response decoding.

- `descriptor.py`: field declarations, requirements and the type registry
- `coercion.py`: raw JSON value coercion
- `context.py`: per-decode object index and ancestor chain
- `requirements.py`: cross-object requirement resolution
- `decoder.py`: the object graph decoder
- `body.py`: request body serializers
"""

from .decoder import ObjectGraphDecoder, decode
from .descriptor import (
    Ancestor,
    BackReference,
    IndexLookup,
    ScalarKind,
    decodable,
    listof,
    nested,
    scalar,
)

__all__ = [
    "Ancestor",
    "BackReference",
    "IndexLookup",
    "ObjectGraphDecoder",
    "ScalarKind",
    "decodable",
    "decode",
    "listof",
    "nested",
    "scalar",
]
