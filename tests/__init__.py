"""Test package for journal-map.

This package contains:
- Unit tests (test_geo.py, test_clustering.py, test_statistics.py, test_region.py)
- Schema and glue tests (test_schemas.py, test_annotations.py)
- Configuration tests (test_config_loader.py)
- Shared fixtures (conftest.py)
"""
