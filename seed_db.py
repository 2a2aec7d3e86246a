"""Seed a local database with one user per role and a few sample posts."""

import logging
import os
import sys
from pathlib import Path

# Add root to pythonpath
sys.path.append(os.getcwd())

from src.adapters.clock import SystemClock  # noqa: E402
from src.adapters.sqlite.migrator import SQLiteMigrator  # noqa: E402
from src.adapters.sqlite.repos import SQLitePostRepo, SQLiteUserRepo  # noqa: E402
from src.components.submission import SubmitPostInput, run_submit  # noqa: E402
from src.domain.entities import UserProfile  # noqa: E402
from src.domain.policy import PolicyEngine  # noqa: E402
from src.rules.loader import load_rules  # noqa: E402

logger = logging.getLogger("seed_db")

SAMPLE_POSTS = [
    ("admin-1", "Dune Revisited", "Dune", "Frank Herbert", 5, ["Science Fiction"]),
    ("admin-1", "Quiet Power", "Middlemarch", "George Eliot", 4, ["Classics", "Fiction"]),
    ("editor-1", "Notes on Beloved", "Beloved", "Toni Morrison", 5, "Fiction"),
]


def seed() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    data_dir = Path(os.environ.get("REVIEWS_DATA_DIR", "./data"))
    data_dir.mkdir(parents=True, exist_ok=True)
    db_path = str(data_dir / "reviews.db")
    logger.info("Seeding to %s", db_path)

    SQLiteMigrator(db_path, "migrations").run_migrations()
    rules = load_rules(Path("rules.yaml"))
    clock = SystemClock()

    users = SQLiteUserRepo(db_path)
    now = clock.now_utc().isoformat()
    for user_id, name, role in [
        ("admin-1", "Ada Admin", "admin"),
        ("editor-1", "Eli Editor", "editor"),
        ("reader-1", "Rae Reader", "reader"),
    ]:
        users.save(UserProfile(id=user_id, display_name=name, role=role), created_at=now)

    posts = SQLitePostRepo(db_path, clock=clock)
    policy = PolicyEngine(rules)
    for user_id, title, book, author, rating, genre in SAMPLE_POSTS:
        result = run_submit(
            SubmitPostInput(
                user_id=user_id,
                title=title,
                book_title=book,
                content=f"A review of {book} by {author}. " * 20,
                rating=rating,
                genre=genre,
            ),
            posts=posts,
            users=users,
            policy=policy,
            rules=rules,
        )
        if result.success and result.post:
            logger.info("Seeded %s [%s]", result.post.slug, result.post.status)
        else:
            logger.error("Failed to seed %s: %s", title, result.errors[0].message)


if __name__ == "__main__":
    seed()
