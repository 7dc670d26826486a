from __future__ import annotations

from landiq.properties.storage import PropertyStore
from landiq.settings import get_settings


def open_store() -> PropertyStore:
    return PropertyStore(get_settings().db_path)
