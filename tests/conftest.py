import orjson
import pytest

from msg_guard.moderation.store import ConfigStore


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


@pytest.fixture
def store(config_path):
    return ConfigStore(str(config_path))


@pytest.fixture
def write_config(config_path):
    """Write a raw document straight to disk."""
    def _write(doc):
        if isinstance(doc, (bytes, str)):
            data = doc.encode("utf-8") if isinstance(doc, str) else doc
        else:
            data = orjson.dumps(doc)
        config_path.write_bytes(data)
        return config_path
    return _write
