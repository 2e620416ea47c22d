from __future__ import annotations

import importlib

from dotenv import load_dotenv

from fellowship_attendance.database.bootstrap import apply_schema, list_tables
from fellowship_attendance.database.connection import DBConfig
from fellowship_attendance.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    apply_schema(config)
    tables = list_tables(config)
    print(f"OK: Applied schema.sql -> {config.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
