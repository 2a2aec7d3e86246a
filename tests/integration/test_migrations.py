import sqlite3
from pathlib import Path

from src.adapters.sqlite.migrator import SQLiteMigrator

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def test_migrations_create_tables(tmp_path):
    db = str(tmp_path / "m.db")
    applied = SQLiteMigrator(db, str(PROJECT_ROOT / "migrations")).run_migrations()

    assert applied == ["001_initial.sql"]
    conn = sqlite3.connect(db)
    tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    conn.close()
    assert {"users", "posts", "post_genres", "_migrations"} <= tables


def test_migrations_are_idempotent(tmp_path):
    db = str(tmp_path / "m.db")
    migrator = SQLiteMigrator(db, str(PROJECT_ROOT / "migrations"))
    migrator.run_migrations()

    assert migrator.run_migrations() == []
