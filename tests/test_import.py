"""Test package imports."""


def test_import_package():
    """Test public API is importable."""
    import refseed

    assert refseed.__version__ == "0.1.0"
    assert refseed.Seeder is not None
    assert refseed.ref(factory_name="a", foreign_key="aID") == refseed.Ref("a", "aID")
