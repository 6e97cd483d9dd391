from pydantic import BaseModel, Field


class ColorToken(BaseModel):
    name: str
    hex: str


class Typography(BaseModel):
    headings: str
    body: str
    weights: list[str]


class DesignTokens(BaseModel):
    colors: list[ColorToken]
    typography: Typography
    spacing: list[str]
    animations: list[str]
    elevation: list[str]
    radius: list[str]


class AnalysisResult(BaseModel):
    tokens: DesignTokens
    prompt: str = Field(min_length=1)


class ErrorResponse(BaseModel):
    error: str
