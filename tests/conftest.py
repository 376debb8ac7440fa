from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from scriptforge.config import ScriptConfig, create_builder  # noqa: E402
from scriptforge.builder import ScriptBuilder  # noqa: E402


@pytest.fixture()
def groovy() -> ScriptBuilder:
    """Builder for a Groovy script with the default generated-by header."""

    return create_builder(ScriptConfig.from_dsl("groovy"))


@pytest.fixture()
def kotlin() -> ScriptBuilder:
    """Builder for a Kotlin script with the default generated-by header."""

    return create_builder(ScriptConfig.from_dsl("kotlin"))
