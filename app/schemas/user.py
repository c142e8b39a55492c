from datetime import date

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    # presence is checked by the service so missing fields answer 400, not 422
    salutation: str | None = None
    name: str | None = None
    email: str | None = None
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    date_of_birth: str | None = Field(default=None, alias="dateOfBirth")
    address: str | None = None
    password: str | None = None

    model_config = {"populate_by_name": True}


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class ProfileResponse(BaseModel):
    salutation: str
    name: str
    email: str
    phone: str = Field(validation_alias="phone_number")
    address: str
    dateOfBirth: date = Field(validation_alias="date_of_birth")
    profilePhoto: str | None = Field(default=None, validation_alias="profile_photo")

    model_config = {"from_attributes": True}

    def to_payload(self) -> dict:
        # profilePhoto is only reported once one has been uploaded
        return self.model_dump(exclude_none=True)
