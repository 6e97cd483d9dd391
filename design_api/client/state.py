"""Upload/render client state and its transitions.

Every transition is a pure function ``ClientState -> ClientState``; the browser
page in ``design_api/static`` and :class:`design_api.client.session.UploadSession`
both follow these rules.
"""

import base64
import json

from pydantic import BaseModel, ConfigDict

from design_api.models.response import AnalysisResult

SUPPORTED_UPLOAD_TYPES = ("image/png", "image/jpeg", "image/webp", "image/gif")
MAX_UPLOAD_BYTES = 50 * 1024 * 1024

UNSUPPORTED_TYPE_MESSAGE = "Please upload a supported image file (PNG, JPG, WEBP, GIF)"
TOO_LARGE_MESSAGE = "Image must be less than 50MB"
READ_FAILED_MESSAGE = "Failed to read the image file"
ANALYZE_FALLBACK_MESSAGE = "Failed to analyze design"
UNEXPECTED_MESSAGE = "An unexpected error occurred"
COPY_FAILED_MESSAGE = "Failed to copy to clipboard"


class ClientState(BaseModel):
    model_config = ConfigDict(frozen=True)

    image: str | None = None  # data URL
    file_name: str = ""
    is_loading: bool = False
    error: str | None = None
    result: AnalysisResult | None = None
    is_dragging: bool = False
    copied: bool = False


def check_upload(content_type: str | None, size: int | None) -> str | None:
    """Return the user-facing rejection message for a file, or None if it is acceptable."""
    if content_type not in SUPPORTED_UPLOAD_TYPES:
        return UNSUPPORTED_TYPE_MESSAGE
    if size is not None and size > MAX_UPLOAD_BYTES:
        return TOO_LARGE_MESSAGE
    return None


def to_data_url(content_type: str, raw: bytes) -> str:
    return f"data:{content_type};base64,{base64.b64encode(raw).decode('ascii')}"


def with_error(state: ClientState, message: str) -> ClientState:
    return state.model_copy(update={"error": message})


def file_loaded(state: ClientState, file_name: str, data_url: str) -> ClientState:
    return state.model_copy(update={"image": data_url, "file_name": file_name, "error": None, "result": None})


def drag_over(state: ClientState) -> ClientState:
    return state.model_copy(update={"is_dragging": True})


def drag_left(state: ClientState) -> ClientState:
    return state.model_copy(update={"is_dragging": False})


def analysis_started(state: ClientState) -> ClientState:
    return state.model_copy(update={"is_loading": True, "error": None})


def analysis_succeeded(state: ClientState, result: AnalysisResult) -> ClientState:
    return state.model_copy(update={"is_loading": False, "result": result, "copied": False})


def analysis_failed(state: ClientState, message: str) -> ClientState:
    # The previous result stays on screen
    return state.model_copy(update={"is_loading": False, "error": message})


def copy_confirmed(state: ClientState) -> ClientState:
    return state.model_copy(update={"copied": True})


def copy_expired(state: ClientState) -> ClientState:
    return state.model_copy(update={"copied": False})


def reset(state: ClientState) -> ClientState:
    return state.model_copy(update={"image": None, "file_name": "", "result": None, "error": None, "copied": False})


def export_result(result: AnalysisResult, epoch_ms: int) -> tuple[str, str]:
    """Return (file name, 2-space indented JSON) for the download artifact."""
    body = json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False)
    return f"design-tokens-{epoch_ms}.json", body
