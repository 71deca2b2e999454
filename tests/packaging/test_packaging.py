"""Packaging correctness verification for xml-semantic-diff.

Tests validate:
- The base install imports and compares without extras
- py.typed marker is present in the wheel
- Pytest plugin entry point and console script are registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import sys
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the base install exposes the documented entry points."""

    def test_import_xml_semantic_diff(self):  # type: ignore[no-untyped-def]
        import xml_semantic_diff

        assert hasattr(xml_semantic_diff, "compare")
        assert hasattr(xml_semantic_diff, "compare_files")
        assert hasattr(xml_semantic_diff, "is_equivalent")
        assert hasattr(xml_semantic_diff, "list_differences")

    def test_compare_basic(self):  # type: ignore[no-untyped-def]
        from xml_semantic_diff import compare

        assert compare("<a/>", "<a/>").is_equivalent()

    def test_subpackages_import(self):  # type: ignore[no-untyped-def]
        from xml_semantic_diff.algorithm import ComparisonEngine
        from xml_semantic_diff.tree import TreeBuilder

        assert ComparisonEngine().compare(
            TreeBuilder().parse_string("<a/>"), TreeBuilder().parse_string("<a/>")
        ) == ()


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        result = subprocess.run(
            ["poetry", "build", "-f", "wheel"],
            cwd=str(PROJECT_ROOT),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert [n for n in names if n.endswith("py.typed")], (
                f"py.typed not found in wheel. Contents: {names}"
            )

    def test_no_pycache_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        expected_modules = [
            "xml_semantic_diff/__init__.py",
            "xml_semantic_diff/__main__.py",
            "xml_semantic_diff/api.py",
            "xml_semantic_diff/cache.py",
            "xml_semantic_diff/comparator.py",
            "xml_semantic_diff/exceptions.py",
            "xml_semantic_diff/loader.py",
            "xml_semantic_diff/protocols.py",
            "xml_semantic_diff/result.py",
            "xml_semantic_diff/algorithm/__init__.py",
            "xml_semantic_diff/algorithm/classifier.py",
            "xml_semantic_diff/algorithm/config.py",
            "xml_semantic_diff/algorithm/engine.py",
            "xml_semantic_diff/algorithm/events.py",
            "xml_semantic_diff/algorithm/matcher.py",
            "xml_semantic_diff/algorithm/selectors.py",
            "xml_semantic_diff/tree/__init__.py",
            "xml_semantic_diff/tree/builder.py",
            "xml_semantic_diff/tree/nodes.py",
            "xml_semantic_diff/tree/normalizer.py",
            "xml_semantic_diff/integrations/__init__.py",
            "xml_semantic_diff/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), (
                    f"Module {module} not found in wheel"
                )

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if "METADATA" in n]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "xml-semantic-diff" in metadata.lower() or "xml_semantic_diff" in metadata.lower()
            assert "0.1.0" in metadata


class TestEntryPoints:
    """Verify the pytest plugin and console script are registered."""

    def test_pytest11_entry_point_registered(self):  # type: ignore[no-untyped-def]
        from importlib.metadata import entry_points

        eps = [
            ep
            for ep in entry_points(group="pytest11")
            if ep.value == "xml_semantic_diff.integrations._pytest_plugin"
        ]
        assert eps, "No pytest11 entry point found for xml-semantic-diff"

    def test_console_script_registered(self):  # type: ignore[no-untyped-def]
        from importlib.metadata import entry_points

        names = [ep.name for ep in entry_points(group="console_scripts")]
        assert "xml-semantic-diff" in names

    def test_fixture_available(self):  # type: ignore[no-untyped-def]
        import importlib

        mod = importlib.import_module("xml_semantic_diff.integrations._pytest_plugin")
        assert hasattr(mod, "assert_xml_equivalent")
        assert callable(mod.assert_xml_equivalent)

    def test_plugin_discovery_via_pytest(self):  # type: ignore[no-untyped-def]
        result = subprocess.run(
            [sys.executable, "-m", "pytest", "--fixtures", "-q"],
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
        )
        assert "assert_xml_equivalent" in result.stdout, (
            f"Fixture not found in pytest fixtures list. stdout: {result.stdout[:500]}"
        )


class TestPackageMetadata:
    def test_version(self):  # type: ignore[no-untyped-def]
        import xml_semantic_diff

        assert xml_semantic_diff.__version__ == "0.1.0"

    def test_all_exports(self):  # type: ignore[no-untyped-def]
        import xml_semantic_diff

        expected = {
            "CompareConfig",
            "ComparisonResult",
            "DifferenceCategory",
            "DifferenceRecord",
            "Document",
            "DocumentDecodeError",
            "DocumentError",
            "DocumentLoader",
            "DocumentReadError",
            "MalformedXmlError",
            "MatchStrategy",
            "ResourceNotFoundError",
            "XmlComparator",
            "XmlDiffError",
            "compare",
            "compare_files",
            "is_equivalent",
            "list_differences",
        }
        actual = set(xml_semantic_diff.__all__)
        assert expected == actual, (
            f"Missing: {expected - actual}, Extra: {actual - expected}"
        )
