"""Test package for geocluster.

This package contains:
- Unit tests (test_spatial.py, test_clustering.py, test_records.py, test_config_loader.py)
- CLI and HTTP tests (test_cli.py, test_actions.py)
- Test configuration and scenario fixtures (conftest.py)
"""
