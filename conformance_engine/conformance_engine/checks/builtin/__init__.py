"""Built-in GeoPackage conformance rules (OGC 12-128r12, Requirements 5-9)."""
