"""Application layer: pattern catalogs, extraction and analysis services."""
