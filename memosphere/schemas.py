"""
Request bodies accepted by the JSON API.

Field names follow the camelCase used by the browser client; each model also
accepts the snake_case attribute names.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    username: str = Field(..., min_length=1, max_length=255, description="Unique login name")
    password: str = Field(..., min_length=1, description="Plain-text password, hashed before storage")


class FederatedIdentity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uid: str = Field(..., min_length=1, description="Subject id asserted by the identity provider")
    display_name: Optional[str] = Field(None, alias="displayName")
    email: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")


class CreateEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, description="Entry title")
    content: str = Field(..., min_length=1, description="Entry body text")
    mood: Optional[str] = Field(None, max_length=32, description="Mood label")
    is_public: bool = Field(False, alias="isPublic")
    image_url: Optional[str] = Field(None, alias="imageUrl")


class UpdateEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    mood: Optional[str] = Field(None, max_length=32)
    is_public: Optional[bool] = Field(None, alias="isPublic")
    image_url: Optional[str] = Field(None, alias="imageUrl")
