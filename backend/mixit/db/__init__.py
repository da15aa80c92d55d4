"""Database Infrastructure — async session factory and SQLAlchemy Base.

Invariants:
    - Single async engine per MixitEngine (owned by DatabaseSessionManager)
    - All sessions are async (AsyncSession)
"""
