from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection,
# so `import docstore` works without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "my-database.json"


@pytest.fixture
def db(db_path: Path):
    """
    A fresh store backed by a temp file; closed after the test.
    """
    from docstore import JsonDatabase

    database = JsonDatabase(db_path)
    yield database
    database.close()


