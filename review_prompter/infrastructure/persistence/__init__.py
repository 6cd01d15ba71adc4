from .database import DATABASE_FILE, Database, Post, PostStatus, User, UserRole, init_database
from .stores import EntryRepository, OptionStore, PostCounter

__all__ = [
    "DATABASE_FILE",
    "Database",
    "EntryRepository",
    "OptionStore",
    "Post",
    "PostCounter",
    "PostStatus",
    "User",
    "UserRole",
    "init_database",
]
