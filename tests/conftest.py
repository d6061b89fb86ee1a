import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


@pytest.fixture()
def buf():
    """Provide a fresh, empty buffer."""
    from buffer import Buffer

    return Buffer()


def drain_bytes(buffer):
    """Flip ``buffer`` and read bytes until end of buffer."""
    from bitops import read_byte

    buffer.flip()
    result = []
    while True:
        byte = read_byte(buffer)
        if byte is None:
            return result
        result.append(byte)


@pytest.fixture()
def drain():
    """
    Fixture that provides the drain_bytes helper without importing conftest.
    """
    return drain_bytes
