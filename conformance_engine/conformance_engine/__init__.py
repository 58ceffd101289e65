"""GeoPackage file conformance checks (OGC 12-128r12)."""

__version__ = "0.1.0"
