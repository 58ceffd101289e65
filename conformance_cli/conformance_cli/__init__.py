"""Command line interface for the GeoPackage conformance checker."""
