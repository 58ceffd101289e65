"""Sub-commands of the gpkg-check CLI."""
