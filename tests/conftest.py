from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.schema_workspace import SchemaWorkspace


@pytest.fixture
def workspace(tmp_path: Path) -> SchemaWorkspace:
    """Provide a project directory rooted at the pytest tmp_path."""
    return SchemaWorkspace(tmp_path)
