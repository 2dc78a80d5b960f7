"""Pytest configuration and fixtures."""
import sys
from pathlib import Path

# Add src and project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from alchemist.models.dataset import Dataset
from alchemist.models.entities import Client, Task, Worker


@pytest.fixture
def sample_dataset():
    """A small, fully valid dataset."""
    return Dataset(
        clients=[
            Client("C1", "Acme", 5, "T1,T2", "GroupA", "{}"),
            Client("C2", "Globex", 3, "T2", "GroupB", "{}"),
            Client("C3", "Initech", 1, "", "GroupA", "{}"),
        ],
        workers=[
            Worker("W1", "Alice", "coding,analysis", "[1,2,3]", 2, "GroupA", 5),
            Worker("W2", "Bob", "design", "1-3", 1, "GroupB", 2),
        ],
        tasks=[
            Task("T1", "Build API", "Dev", 3, "coding", "1-2", 2),
            Task("T2", "Mockups", "Design", 1, "design", "[1]", 1),
        ],
    )


@pytest.fixture
def sample_json_path():
    """Path to the bundled sample data file."""
    return Path(__file__).parent.parent / "data" / "sample.json"
