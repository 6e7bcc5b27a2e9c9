from typing import Annotated
from datetime import datetime
from pydantic import Field, StringConstraints, field_validator
from tracker.schemas.base import CamelModel

CategoryStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=50)]

class ExerciseCreate(CamelModel):
    name: Annotated[str, Field(max_length=100)]
    category: CategoryStr | None = None

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2

    @field_validator("category")
    @classmethod
    def empty_category_is_none(cls, v: str | None) -> str | None:
        return v or None

class ExerciseRead(CamelModel):
    id: int
    name: str
    category: str | None = None
    created_at: datetime
    updated_at: datetime
