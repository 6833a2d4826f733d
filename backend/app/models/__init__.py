"""ORM Models — SQLAlchemy declarative models for all forum entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Group is the root for threads and subscriptions; JobListing stands alone

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.user import User  # noqa: F401
from app.models.group import Group  # noqa: F401
from app.models.subscription import Subscription  # noqa: F401
from app.models.thread import Thread  # noqa: F401
from app.models.post import Post  # noqa: F401
from app.models.job_listing import JobListing  # noqa: F401
