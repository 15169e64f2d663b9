"""Test that the project setup is working correctly."""

import bundle_risk_scanner


def test_version() -> None:
    """Test that version is defined."""
    assert bundle_risk_scanner.__version__ == "0.1.0"


def test_import_modules() -> None:
    """Test that all submodules can be imported."""
    from bundle_risk_scanner import config
    from bundle_risk_scanner import detector
    from bundle_risk_scanner import ingestor
    from bundle_risk_scanner import pipeline

    assert config is not None
    assert detector is not None
    assert ingestor is not None
    assert pipeline is not None
