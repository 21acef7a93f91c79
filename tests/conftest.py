"""Shared test fixtures for the board store, drag session, and server."""

import sys
from pathlib import Path

import pytest

# Ensure the project root is importable (pkg.board, board_server)
sys.path.insert(0, str(Path(__file__).parent.parent))

from pkg.board.config import BoardConfig
from pkg.board.schema import Column, Task
from pkg.board.session import DragSession
from pkg.board.store import BoardStore


@pytest.fixture
def config():
    return BoardConfig()


@pytest.fixture
def store(config):
    return BoardStore(config)


@pytest.fixture
def session(store):
    return DragSession(store)


@pytest.fixture
def two_column_store(config):
    """Columns 1 and 2; tasks 11, 12 in column 1 and 13 in column 2."""
    return BoardStore(
        config,
        columns=[Column(1, "Todo"), Column(2, "Doing")],
        tasks=[Task(11, 1, "a"), Task(12, 1, "b"), Task(13, 2, "c")],
    )


@pytest.fixture
def client():
    from board_server import create_app

    app = create_app(BoardConfig())
    app.config["TESTING"] = True
    return app.test_client()
