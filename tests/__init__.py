"""Test package for geocluster.

This package contains:
- Unit tests (test_geo.py, test_index.py, test_dbscan.py, test_clustering.py)
- Configuration and I/O tests (test_config_loader.py, test_io.py)
- Command-line tests (test_cli.py)
- Test configuration (conftest.py)
"""
