"""Smoke tests for the package surface."""


class TestPackageImports:
    """Verify that the public API can be imported."""

    def test_import_eidas(self):
        """Test that the main package can be imported."""
        import eidas

        assert eidas.__version__ == "0.1.0"

    def test_public_api(self):
        """Test the top-level package exposes the request entry points."""
        import eidas

        for name in eidas.__all__:
            assert hasattr(eidas, name), name

    def test_certificate_types(self):
        """Test only QWAC and QSEAL are defined."""
        from eidas import CertificateType

        assert {t.name for t in CertificateType} == {"QWAC", "QSEAL"}
