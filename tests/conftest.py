import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """main() installs a stderr handler on the root logger; drop it after each test."""
    root = logging.getLogger()
    before, level = set(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
