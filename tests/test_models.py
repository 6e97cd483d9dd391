import pytest
from pydantic import ValidationError

from design_api.models.request import AnalyzeRequest
from design_api.models.response import AnalysisResult, ColorToken, DesignTokens, Typography


def _tokens() -> DesignTokens:
    return DesignTokens(
        colors=[ColorToken(name="Primary", hex="#2BA8B8")],
        typography=Typography(headings="Inter, 600", body="Inter, 400", weights=["400", "600"]),
        spacing=["4px", "8px"],
        animations=[],
        elevation=[],
        radius=["8px"],
    )


def test_analyze_request_uses_camel_case_alias():
    req = AnalyzeRequest.model_validate({"imageBase64": "data:image/png;base64,AA=="})
    assert req.image_base64 == "data:image/png;base64,AA=="


def test_analyze_request_image_optional():
    assert AnalyzeRequest.model_validate({}).image_base64 is None


def test_analysis_result_serializes_in_field_order():
    result = AnalysisResult(tokens=_tokens(), prompt="Create a hero section.")
    assert list(result.model_dump()) == ["tokens", "prompt"]
    assert list(result.model_dump()["tokens"]) == ["colors", "typography", "spacing", "animations", "elevation", "radius"]


def test_analysis_result_requires_prompt():
    with pytest.raises(ValidationError):
        AnalysisResult(tokens=_tokens(), prompt="")


def test_design_tokens_require_every_field():
    with pytest.raises(ValidationError):
        DesignTokens.model_validate({"colors": []})
