"""
SQLite Database Repository - Options, Users, Forms and Entries
===============================================================

Stores the installation-wide option records (notices, activation, plugin
settings), admin users, forms (as typed posts) and form entries.
"""

import json
import sqlite3
import logging
from typing import Any, List, Optional
from dataclasses import dataclass
from enum import Enum
from contextlib import contextmanager

logger = logging.getLogger(__name__)

DATABASE_FILE = "review_prompter.db"


class PostStatus(Enum):
    """Publication status for a post."""
    PUBLISH = "publish"
    DRAFT = "draft"
    TRASH = "trash"


class UserRole(Enum):
    SUPER_ADMIN = "super_admin"
    EDITOR = "editor"


@dataclass
class User:
    """Admin panel user record."""
    id: int
    username: str
    password_hash: str
    role: str = UserRole.EDITOR.value
    created_at: str = ""

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN.value


@dataclass
class Post:
    """Typed content record (forms are posts of the plugin's type)."""
    id: int
    post_type: str
    title: str
    status: str = PostStatus.PUBLISH.value
    created_at: str = ""


class Database:
    """
    SQLite database for the admin panel.

    Usage:
        db = Database()
        db.init()

        db.update_option("wpforms_activated", {"lite": 1700000000})
        db.get_option("wpforms_activated", {})

        form_id = db.add_post("wpforms", "Contact")
        db.add_entry(form_id)
    """

    def __init__(self, db_path: str = DATABASE_FILE):
        self.db_path = db_path

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def init(self):
        """Initialize database tables."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS options (
                    name TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    username TEXT UNIQUE NOT NULL,
                    password_hash TEXT NOT NULL,
                    role TEXT NOT NULL DEFAULT 'editor',
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS posts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    post_type TEXT NOT NULL,
                    title TEXT NOT NULL DEFAULT '',
                    status TEXT NOT NULL DEFAULT 'publish',
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    form_id INTEGER NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            logger.info(f"Database initialized: {self.db_path}")

    # ── Options ────────────────────────────────────────────────────

    def get_option(self, name: str, default: Any = None) -> Any:
        """Get a JSON-decoded option value, or `default` when absent/corrupt."""
        with self._get_connection() as conn:
            row = conn.execute("SELECT value FROM options WHERE name = ?", (name,)).fetchone()

        if row is None:
            return default

        try:
            return json.loads(row["value"])
        except (TypeError, ValueError):
            logger.warning(f"Option '{name}' holds invalid JSON, using default")
            return default

    def update_option(self, name: str, value: Any) -> bool:
        """Insert or replace an option value."""
        with self._get_connection() as conn:
            conn.execute(
                "INSERT INTO options (name, value) VALUES (?, ?) "
                "ON CONFLICT(name) DO UPDATE SET value = excluded.value",
                (name, json.dumps(value))
            )
            return True

    # ── Posts (forms) ──────────────────────────────────────────────

    def add_post(self, post_type: str, title: str, status: str = PostStatus.PUBLISH.value) -> int:
        """Add a post and return its ID."""
        with self._get_connection() as conn:
            cursor = conn.execute(
                "INSERT INTO posts (post_type, title, status) VALUES (?, ?, ?)",
                (post_type, title, status)
            )
            return cursor.lastrowid

    def get_post(self, post_id: int) -> Optional[Post]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM posts WHERE id = ?", (post_id,)).fetchone()
            return self._row_to_post(row) if row else None

    def count_posts(self, post_type: str, status: str = PostStatus.PUBLISH.value) -> int:
        """Count posts of a type in a given status."""
        with self._get_connection() as conn:
            return conn.execute(
                "SELECT COUNT(*) FROM posts WHERE post_type = ? AND status = ?",
                (post_type, status)
            ).fetchone()[0]

    def _row_to_post(self, row: sqlite3.Row) -> Post:
        return Post(
            id=row["id"],
            post_type=row["post_type"],
            title=row["title"] or "",
            status=row["status"],
            created_at=row["created_at"] or ""
        )

    # ── Entries ────────────────────────────────────────────────────

    def add_entry(self, form_id: int) -> int:
        """Store a form submission and return its ID."""
        with self._get_connection() as conn:
            cursor = conn.execute("INSERT INTO entries (form_id) VALUES (?)", (form_id,))
            return cursor.lastrowid

    def get_entry_ids(self, limit: int = 0) -> List[int]:
        """Most recent entry IDs, newest first. A limit of 0 means no limit."""
        with self._get_connection() as conn:
            if limit > 0:
                rows = conn.execute(
                    "SELECT id FROM entries ORDER BY id DESC LIMIT ?", (limit,)
                ).fetchall()
            else:
                rows = conn.execute("SELECT id FROM entries ORDER BY id DESC").fetchall()
            return [row["id"] for row in rows]

    def count_entries(self) -> int:
        with self._get_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM entries").fetchone()[0]

    # ── User CRUD ──────────────────────────────────────────────────

    def create_user(self, username: str, password_hash: str, role: str = UserRole.EDITOR.value) -> Optional[int]:
        """Create a new user."""
        try:
            with self._get_connection() as conn:
                cursor = conn.execute(
                    "INSERT INTO users (username, password_hash, role) VALUES (?, ?, ?)",
                    (username, password_hash, role)
                )
                return cursor.lastrowid
        except sqlite3.IntegrityError:
            logger.warning(f"User {username} already exists")
            return None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE username = ?", (username,)).fetchone()
            return self._row_to_user(row) if row else None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        with self._get_connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return self._row_to_user(row) if row else None

    def _row_to_user(self, row: sqlite3.Row) -> User:
        """Convert database row to User object."""
        return User(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            role=row["role"],
            created_at=row["created_at"] or ""
        )


def init_database(db_path: str = DATABASE_FILE) -> Database:
    """Create tables if needed and return the database."""
    db = Database(db_path)
    db.init()
    return db
