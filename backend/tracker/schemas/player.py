from typing import Annotated
from datetime import datetime
from pydantic import EmailStr, Field, StringConstraints, field_validator
from tracker.schemas.base import CamelModel

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
PositionStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]
PHOTO_URL_MAX = 500

class PlayerBase(CamelModel):
    email: EmailStr = Field(max_length=255)
    first_name: NameStr
    last_name: NameStr
    position: PositionStr
    photo_url: str | None = None

    @field_validator("photo_url")
    @classmethod
    def limit_plain_urls(cls, v: str | None) -> str | None:
        # inline data: uploads are stored as text, plain links are capped
        if v is not None and not v.startswith("data:") and len(v) > PHOTO_URL_MAX:
            raise ValueError(f"photo URL must be at most {PHOTO_URL_MAX} characters")
        return v

class PlayerCreate(PlayerBase):
    pass

class PlayerUpdate(PlayerBase):
    # the web form echoes the id back in the body; optional here
    id: int | None = None

class PlayerSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    position: str

class PlayerRead(PlayerBase):
    id: int
    created_at: datetime
    updated_at: datetime
