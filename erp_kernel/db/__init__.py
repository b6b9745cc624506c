"""Database access: engine lifecycle and SQLAlchemy Core table definitions."""
