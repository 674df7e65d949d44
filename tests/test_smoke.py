"""Minimal smoke tests for project scaffolding."""

from __future__ import annotations

import pytest


@pytest.mark.unit
def test_analysis_engine_imports() -> None:
    """Import the analysis engine and verify the public entry point exists."""

    from analysis.engine import analyze_livesplit

    assert callable(analyze_livesplit)


@pytest.mark.unit
def test_analysis_package_does_not_import_django() -> None:
    """The pure engine modules never reference Django."""

    from pathlib import Path

    import analysis

    package_dir = Path(analysis.__file__).parent
    for module in package_dir.glob("*.py"):
        assert "django" not in module.read_text(encoding="utf-8"), module.name


@pytest.mark.integration
def test_django_project_loads() -> None:
    """Import and initialize Django to verify settings are valid."""

    import os

    import django
    from django.conf import settings

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "timeloss.settings")
    django.setup()
    assert "core.apps.CoreConfig" in settings.INSTALLED_APPS
    assert settings.TIMELOSS_REQUIRE_ATTEMPTS is False
