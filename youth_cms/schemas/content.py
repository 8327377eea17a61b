"""Response schema for the public site copy."""

from pydantic import BaseModel, ConfigDict


class SiteContentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    organization_name: str
    slogan: str
    definition_text: str
    vision_text: str
    mission_text: str
    goals_text: str
    volunteer_form_url: str


class SiteContentResponse(BaseModel):
    item: SiteContentRead
