"""Infrastructure layer: SQLite database and the entity store.

This layer depends on stdlib and third-party libs (SQLAlchemy).
It must never import from services, commands, or output.
"""
