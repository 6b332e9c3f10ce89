from pydantic import BaseModel, Field, field_validator
from typing import Optional

# Sort keys accepted by the video listing, mapped to Video column names
SORTABLE_FIELDS = {
    "createdAt": "created_at",
    "created_at": "created_at",
    "duration": "duration",
    "title": "title",
    "views": "views",
}


class VideoListQuery(BaseModel):  # listing/search schema
    page: int = Field(1, ge=1)
    limit: int = Field(3, ge=1, le=50)
    query: Optional[str] = None
    sort_by: Optional[str] = None
    sort_type: Optional[int] = None
    user_id: Optional[int] = None

    @field_validator("sort_type", mode="before")
    @classmethod
    def parse_sort_type(cls, value):
        """Only exactly 1 or -1 count as a direction; anything else means default order"""
        if value is None or isinstance(value, bool):
            return None
        try:
            direction = int(str(value).strip())
        except ValueError:
            return None
        return direction if direction in (1, -1) else None

    @field_validator("query", "sort_by", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def sort_column(self) -> Optional[str]:
        if self.sort_by is None or self.sort_type is None:
            return None
        return SORTABLE_FIELDS.get(self.sort_by)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class VideoDetailsUpdate(BaseModel):  # metadata update schema
    title: Optional[str] = None
    description: Optional[str] = None
