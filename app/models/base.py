# app/models/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Tenants and users live next to the tenant-scoped clinic data in one
    schema; everything shares this metadata.
    """

    pass
