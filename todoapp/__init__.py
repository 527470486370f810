"""Todo items service: swappable SQLite/MySQL persistence behind a small HTTP API."""

__version__ = "1.0.0"
