"""Infrastructure Layer — database access, repositories and logging setup.

Invariants:
    - Infrastructure never imports from api/
    - SQLAlchemy failures surface as DatabaseError (core/errors.py)
"""
