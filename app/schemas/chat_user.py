from datetime import date, datetime

from pydantic import BaseModel, Field


class ChatProfileResponse(BaseModel):
    id: int
    name: str
    qualification: str
    phone: str
    dob: date
    about: str
    skills: list[str]
    profilePhoto: str | None = Field(default=None, validation_alias="profile_photo")
    document: str | None = None
    updatedAt: datetime = Field(validation_alias="updated_at")

    model_config = {"from_attributes": True}
