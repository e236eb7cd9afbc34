import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def isolated_project(tmp_path, monkeypatch):
    """Run inside an empty directory so config lookup and logs stay in tmp_path."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PRESETWORKS_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("PRESETWORKS_LOG_LEVEL", raising=False)
    for key in list(os.environ):
        if key.startswith("PRESETWORKS_PRESET_BUILDER__"):
            monkeypatch.delenv(key)
    yield tmp_path
