"""Classification of declared column types against the GeoPackage data types.

The allow-list mirrors the "GeoPackage Data Types" table of OGC 12-128r12.
Matching is case-sensitive and exact; ``TEXT`` and ``BLOB`` may also carry a
parenthesised maximum length.
"""

from __future__ import annotations

import re

ALLOWED_SQL_TYPES: frozenset[str] = frozenset(
    {
        "BOOLEAN",
        "TINYINT",
        "SMALLINT",
        "MEDIUMINT",
        "INT",
        "INTEGER",
        "FLOAT",
        "DOUBLE",
        "REAL",
        "TEXT",
        "BLOB",
        "DATE",
        "DATETIME",
        "GEOMETRY",
        "POINT",
        "LINESTRING",
        "POLYGON",
        "MULTIPOINT",
        "MULTILINESTRING",
        "MULTIPOLYGON",
        "GEOMETRYCOLLECTION",
    }
)

# Length must be a positive integer literal; leading zeros are tolerated.
TEXT_TYPE = re.compile(r"TEXT\(0*[1-9][0-9]*\)")
BLOB_TYPE = re.compile(r"BLOB\(0*[1-9][0-9]*\)")


def is_allowed_type(declared_type: str) -> bool:
    """Return True if *declared_type* is a permitted GeoPackage column type."""
    return (
        declared_type in ALLOWED_SQL_TYPES
        or TEXT_TYPE.fullmatch(declared_type) is not None
        or BLOB_TYPE.fullmatch(declared_type) is not None
    )
