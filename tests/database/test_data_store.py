# tests/database/test_data_store.py
import pytest
from sqlalchemy import inspect, text

from resource_registry.database import DataStore


class TestDataStore:
    def test_new_session_requires_open(self):
        store = DataStore("sqlite://")

        with pytest.raises(RuntimeError):
            store.new_session()

    def test_open_creates_tables(self):
        with DataStore("sqlite://") as store:
            tables = set(inspect(store.engine).get_table_names())

            assert store.is_open
            assert {"roles", "phases", "resources", "resource_phases", "role_phase_dependencies"} <= tables

        assert not store.is_open

    def test_sqlite_foreign_keys_enabled(self):
        """SQLite 연결마다 외래 키 검사가 켜져 있어야 CASCADE가 동작합니다."""
        with DataStore("sqlite://") as store:
            with store.session_scope() as session:
                assert session.execute(text("PRAGMA foreign_keys")).scalar() == 1
