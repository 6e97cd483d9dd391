from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    # Optional at the schema level so a missing image gets our 400 message, not a 422
    image_base64: str | None = Field(default=None, alias="imageBase64")

    model_config = ConfigDict(populate_by_name=True)


class ImagePayload(BaseModel):
    """A data URL that passed server-side validation."""

    mime_type: str
    size: int
    detected_format: str
    data_url: str
