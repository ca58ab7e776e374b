"""Database Infrastructure — SQLAlchemy declarative Base for the metadata tables.

Invariants:
    - One async engine per app, built by DatabaseSessionManager.from_url in create_app()
    - All sessions are async (AsyncSession)
"""
