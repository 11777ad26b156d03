import os
import time
from pathlib import Path

import pytest


@pytest.fixture
def workdir(tmp_path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def touch_later(path: Path, seconds: int = 100) -> None:
    """Move the modification time of `path` into the future."""
    ns = time.time_ns() + seconds * 1_000_000_000
    os.utime(path, ns=(ns, ns))
