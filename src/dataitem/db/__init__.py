"""Database interaction components."""

from dataitem.db.client import DbClient
from dataitem.db.schema import Entity, metadata

__all__ = ["DbClient", "Entity", "metadata"]
