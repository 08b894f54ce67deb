"""Shared fixtures for chatdown tests."""

import gzip
import logging

import pytest
from chatdown.logging_config import SERVER_LOGGERS


@pytest.fixture(autouse=True)
def reset_chatdown_logger():
    """Drop handlers installed by setup_logging so streams don't leak between tests."""
    yield
    for name in ("chatdown", *SERVER_LOGGERS):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True


@pytest.fixture
def man_root(tmp_path):
    """A man page tree whose pages hold HTML (rendered with `cat` in tests)."""
    root = tmp_path / "man"
    (root / "man1").mkdir(parents=True)
    with gzip.open(root / "man1" / "ls.1.gz", "wb") as f:
        f.write(b"<h1>LS</h1><p>list directory contents</p>")
    with gzip.open(root / "man1" / "broken.1.gz", "wb") as f:
        f.write(b'<p>logo <img alt="no source"></p>')
    (root / "man1" / "corrupt.1.gz").write_bytes(b"not gzip data")
    return root
