"""Tests for the osutil package."""

import pytest


def test_package_import():
    """Test that the package can be imported."""
    import osutil
    assert osutil.__version__ == "0.1.0"


def test_cli_import():
    """Test that CLI module can be imported."""
    from osutil.cli import main
    assert callable(main)


def test_clients_satisfy_interfaces():
    """Test that the concrete clients implement the interfaces."""
    from osutil.interfaces import BuildService, PackageTracker
    from osutil.obs import OBSClient
    from osutil.repology import RepologyClient

    assert BuildService in OBSClient.__mro__
    assert PackageTracker in RepologyClient.__mro__


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
