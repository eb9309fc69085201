from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.locale_builder import LocaleBuilder


@pytest.fixture
def locale_builder(tmp_path: Path) -> LocaleBuilder:
    """Provide a locale project builder rooted at the pytest tmp_path."""
    return LocaleBuilder(tmp_path)
