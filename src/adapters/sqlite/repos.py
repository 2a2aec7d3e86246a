import logging
import sqlite3
from typing import Any
from uuid import uuid4

from src.domain.entities import UserProfile
from src.domain.errors import StoreUnavailableError
from src.domain.projection import StoredDocument
from src.domain.query import FeedQuery

logger = logging.getLogger(__name__)

# document field -> posts column
POST_COLUMNS: dict[str, str] = {
    "title": "title",
    "slug": "slug",
    "excerpt": "excerpt",
    "content": "content",
    "bookTitle": "book_title",
    "authorName": "author_name",
    "rating": "rating",
    "coverImage": "cover_image",
    "publicationYear": "publication_year",
    "status": "status",
    "authorId": "author_id",
    "authorRole": "author_role",
    "likes": "likes",
    "comments": "comments",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

ORDER_COLUMNS = {"createdAt": "created_at", "likes": "likes"}


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class _SQLiteRepo:
    def __init__(self, db_path: str, timeout: float = 5.0):
        self.db_path = db_path
        self.timeout = timeout

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn


class SQLitePostRepo(_SQLiteRepo):
    """
    Append-only post document store.

    Ids and timestamps are assigned here at write time. Timestamps are kept
    as ISO-8601 text, the store's native representation.
    """

    def __init__(self, db_path: str, clock: Any, timeout: float = 5.0):
        super().__init__(db_path, timeout)
        self.clock = clock

    def create(self, data: dict[str, Any]) -> StoredDocument:
        post_id = str(uuid4())
        now = self.clock.now_utc().isoformat(timespec="microseconds")

        doc = {key: data.get(key) for key in POST_COLUMNS}
        doc["likes"] = data.get("likes") or 0
        doc["comments"] = data.get("comments") or 0
        doc["createdAt"] = now
        doc["updatedAt"] = now
        genres = list(data.get("genre") or [])

        columns = ["id", *POST_COLUMNS.values()]
        placeholders = ", ".join("?" for _ in columns)
        values = [post_id, *(doc[key] for key in POST_COLUMNS)]

        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StoreUnavailableError("create post", e) from e
        try:
            conn.execute(
                f"INSERT INTO posts ({', '.join(columns)}) VALUES ({placeholders})",
                values,
            )
            conn.executemany(
                "INSERT INTO post_genres (post_id, genre, position) VALUES (?, ?, ?)",
                [(post_id, genre, i) for i, genre in enumerate(genres)],
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreUnavailableError("create post", e) from e
        finally:
            conn.close()

        doc["genre"] = genres
        logger.debug("Created post %s", post_id)
        return StoredDocument(id=post_id, data=doc)

    def get(self, post_id: str) -> StoredDocument | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT * FROM posts WHERE id = ?", (post_id,)).fetchone()
                if not row:
                    return None
                genres = self._load_genres(conn, [post_id])
                return self._map_row(row, genres.get(post_id, []))
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreUnavailableError("get post", e) from e

    def query(self, q: FeedQuery) -> list[StoredDocument]:
        sql = "SELECT * FROM posts WHERE status = ?"
        params: list[Any] = [q.status]

        if q.author_id is not None:
            sql += " AND author_id = ?"
            params.append(q.author_id)
        if q.genre is not None:
            sql += " AND EXISTS (SELECT 1 FROM post_genres g WHERE g.post_id = posts.id AND g.genre = ?)"
            params.append(q.genre)

        sql += f" ORDER BY {ORDER_COLUMNS[q.order_by]} DESC, id ASC LIMIT ?"
        params.append(q.limit)

        try:
            conn = self._get_conn()
            try:
                rows = conn.execute(sql, params).fetchall()
                genres = self._load_genres(conn, [r["id"] for r in rows])
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreUnavailableError("query posts", e) from e

        return [self._map_row(r, genres.get(r["id"], [])) for r in rows]

    def _load_genres(self, conn: sqlite3.Connection, post_ids: list[str]) -> dict[str, list[str]]:
        if not post_ids:
            return {}
        placeholders = ", ".join("?" for _ in post_ids)
        rows = conn.execute(
            f"SELECT post_id, genre FROM post_genres WHERE post_id IN ({placeholders}) "
            "ORDER BY post_id, position ASC",
            post_ids,
        ).fetchall()
        genres: dict[str, list[str]] = {}
        for row in rows:
            genres.setdefault(row["post_id"], []).append(row["genre"])
        return genres

    def _map_row(self, row: dict[str, Any], genres: list[str]) -> StoredDocument:
        data = {key: row[column] for key, column in POST_COLUMNS.items()}
        data["genre"] = genres
        return StoredDocument(id=row["id"], data=data)


class SQLiteUserRepo(_SQLiteRepo):
    def lookup(self, user_id: str) -> UserProfile | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute(
                    "SELECT id, display_name, role FROM users WHERE id = ?", (user_id,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreUnavailableError("look up user", e) from e

        if not row:
            return None
        return UserProfile(id=row["id"], role=row["role"], display_name=row["display_name"])

    def save(self, profile: UserProfile, created_at: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO users (id, display_name, role, created_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    display_name=excluded.display_name,
                    role=excluded.role
            """,
                (profile.id, profile.display_name, profile.role, created_at),
            )
            conn.commit()
        finally:
            conn.close()
