"""Infrastructure Layer: database access, repositories and logging.

Invariants:
    - SQLAlchemy errors never leave this layer untranslated (see database.translate_db_errors)
"""
