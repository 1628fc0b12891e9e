"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from keepsake.models.profile import Profile  # noqa: F401
from keepsake.models.special_day import SpecialDay  # noqa: F401
