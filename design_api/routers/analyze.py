import httpx
from fastapi import APIRouter, Depends
from loguru import logger

from design_api.agents.design_agent import analyze_design, get_provider_client
from design_api.images import validate_image
from design_api.models.request import AnalyzeRequest
from design_api.models.response import AnalysisResult, ErrorResponse

router = APIRouter()

_ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 413, 429, 500)
}


@router.post("/api/analyze-design", response_model=AnalysisResult, responses=_ERROR_RESPONSES)
async def analyze(
    request: AnalyzeRequest,
    client: httpx.AsyncClient = Depends(get_provider_client),
) -> AnalysisResult:
    """Extract design tokens and a recreation prompt from a screenshot data URL."""
    image = validate_image(request.image_base64)
    logger.info(
        "Analysis request: {mime} ({size} bytes)",
        mime=image.mime_type,
        size=image.size,
    )
    return await analyze_design(client, image)
