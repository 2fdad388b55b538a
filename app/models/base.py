from datetime import datetime, timezone
from beanie import Document
from pydantic import Field


class TimestampedDocument(Document):
    """Base document class with creation/modification timestamps"""

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Settings:
        abstract = True  # Make this an abstract base class

    def update_timestamp(self):
        """Update the last modified timestamp"""
        self.updated_at = datetime.now(timezone.utc)
