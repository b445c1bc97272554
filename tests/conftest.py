import logging
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for CI environments where
# Python might not automatically include it.
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.vcap_loader import ConfigLoader


@pytest.fixture
def fresh_loader():
    """Reset the ConfigLoader singleton around a test."""
    ConfigLoader.reset()
    yield ConfigLoader
    ConfigLoader.reset()


@pytest.fixture
def restore_root_logging():
    """Put the root logger's handlers and level back after setup_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
