import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.data import load_orders
from core.table import OrderTableEngine


@pytest.fixture
def engine():
    """Engine over the 13 seed orders with default view state."""
    return OrderTableEngine(load_orders())
