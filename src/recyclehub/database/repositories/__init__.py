"""Database repositories."""

from recyclehub.database.repositories.status import StatusRecord, StatusRepository


__all__ = ["StatusRecord", "StatusRepository"]
