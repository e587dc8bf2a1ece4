from __future__ import annotations

import logging
import os
from typing import Iterator

import pytest

from key_client.config import settings as settings_module


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    for key in list(os.environ):
        if key.startswith("KEY_CLIENT_"):
            monkeypatch.delenv(key)
    # Keep a stray .env in the working directory out of the tests.
    monkeypatch.chdir(tmp_path)
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()
    logging.getLogger("key_client").setLevel(logging.NOTSET)
