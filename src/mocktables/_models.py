"""
Internal pydantic models.
"""
from pydantic import BaseModel


class CollectionSummary(BaseModel):
    name: str
    count: int

    def __str__(self) -> str:
        return f"{self.name} ({self.count})"
