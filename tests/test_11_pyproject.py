"""Tests for pyproject.toml and package installation."""
from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


class TestPackageInstallation:
    """Test that the package is properly importable."""

    def test_version_defined(self):
        """Package has __version__ attribute."""
        import webtts
        assert isinstance(webtts.__version__, str)
        assert len(webtts.__version__) > 0

    def test_core_modules_importable(self):
        """Core modules can be imported."""
        from webtts.api import routes, schemas
        from webtts.core import config, errors, logging
        from webtts.services import tts_service, validators
        from webtts.tts import capabilities, cloud, formats, stream

        for module in (routes, schemas, config, errors, logging, tts_service,
                       validators, capabilities, cloud, formats, stream):
            assert module is not None


class TestCLIEntryPoint:
    """Test the CLI entry point."""

    def test_cli_help_exits_zero(self):
        """CLI --help exits with code 0."""
        result = subprocess.run(
            [sys.executable, "-m", "webtts.cli", "--help"],
            capture_output=True,
            text=True,
            cwd=Path(__file__).parent.parent,
            env={**os.environ, "PYTHONPATH": str(Path(__file__).parent.parent / "src")},
        )
        assert result.returncode == 0
        assert "webtts CLI" in result.stdout


class TestPyprojectToml:
    """Test pyproject.toml configuration."""

    def test_pyproject_exists(self):
        assert PYPROJECT.exists()

    def test_pyproject_valid_toml(self):
        import tomllib  # Python 3.11+

        data = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))
        assert data["project"]["name"] == "webtts"
        assert data["project"]["scripts"]["webtts"] == "webtts.cli:main"

    def test_pyproject_has_dependencies(self):
        import tomllib

        data = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))
        deps = data["project"].get("dependencies", [])
        dep_names = [d.split(">=")[0].split("[")[0] for d in deps]
        for name in ("fastapi", "uvicorn", "pydantic", "httpx", "pyyaml"):
            assert name in dep_names
        assert "pytest" in [d.split(">=")[0] for d in data["project"]["optional-dependencies"]["test"]]
