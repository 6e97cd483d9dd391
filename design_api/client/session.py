import asyncio
import time
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Protocol

import httpx
from loguru import logger

from design_api.client import state as transitions
from design_api.client.state import ClientState
from design_api.models.response import AnalysisResult

ANALYZE_PATH = "/api/analyze-design"
COPY_CONFIRMATION_SECONDS = 2.0

Clipboard = Callable[[str], Awaitable[None]]


class UploadFile(Protocol):
    """What the session needs from a picked or dropped file (starlette's UploadFile fits)."""

    filename: str | None
    content_type: str | None
    size: int | None

    async def read(self) -> bytes: ...


def _epoch_ms() -> int:
    return time.time_ns() // 1_000_000


class UploadSession:
    """Drives a :class:`ClientState` through the upload -> analyze -> export flow.

    ``http`` must be an AsyncClient whose base_url points at the API. The
    clipboard is any coroutine function taking the text to copy.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        clipboard: Clipboard,
        *,
        clock: Callable[[], int] = _epoch_ms,
        copy_confirmation_seconds: float = COPY_CONFIRMATION_SECONDS,
    ) -> None:
        self.state = ClientState()
        self._http = http
        self._clipboard = clipboard
        self._clock = clock
        self._copy_confirmation_seconds = copy_confirmation_seconds
        self._copy_timer: asyncio.TimerHandle | None = None

    def drag_over(self) -> None:
        self.state = transitions.drag_over(self.state)

    def drag_left(self) -> None:
        self.state = transitions.drag_left(self.state)

    async def drop(self, file: UploadFile | None) -> None:
        self.state = transitions.drag_left(self.state)
        if file is not None:
            await self.accept_file(file)

    async def accept_file(self, file: UploadFile) -> None:
        rejection = transitions.check_upload(file.content_type, file.size)
        if rejection:
            logger.debug("Rejected upload {name}: {reason}", name=file.filename, reason=rejection)
            self.state = transitions.with_error(self.state, rejection)
            return

        try:
            raw = await file.read()
        except (OSError, ValueError) as e:
            logger.warning("Could not read {name}: {err}", name=file.filename, err=e)
            self.state = transitions.with_error(self.state, transitions.READ_FAILED_MESSAGE)
            return

        # Size may be unknown until the bytes are in hand
        rejection = transitions.check_upload(file.content_type, len(raw))
        if rejection:
            self.state = transitions.with_error(self.state, rejection)
            return

        data_url = transitions.to_data_url(file.content_type, raw)
        self.state = transitions.file_loaded(self.state, file.filename or "", data_url)

    async def analyze(self) -> None:
        if not self.state.image or self.state.is_loading:
            return

        self.state = transitions.analysis_started(self.state)
        try:
            response = await self._http.post(ANALYZE_PATH, json={"imageBase64": self.state.image})
        except httpx.HTTPError as e:
            logger.warning("Analysis request failed: {err!r}", err=e)
            self.state = transitions.analysis_failed(self.state, transitions.UNEXPECTED_MESSAGE)
            return

        if not response.is_success:
            self.state = transitions.analysis_failed(self.state, _error_message(response))
            return

        try:
            result = AnalysisResult.model_validate(response.json())
        except ValueError as e:
            logger.warning("Unreadable analysis response: {err}", err=e)
            self.state = transitions.analysis_failed(self.state, transitions.UNEXPECTED_MESSAGE)
            return
        self._cancel_copy_timer()
        self.state = transitions.analysis_succeeded(self.state, result)

    async def copy_prompt(self) -> None:
        if self.state.result is None:
            return
        try:
            await self._clipboard(self.state.result.prompt)
        except Exception as e:
            logger.warning("Clipboard write failed: {err!r}", err=e)
            self.state = transitions.with_error(self.state, transitions.COPY_FAILED_MESSAGE)
            return

        self.state = transitions.copy_confirmed(self.state)
        self._cancel_copy_timer()
        self._copy_timer = asyncio.get_running_loop().call_later(self._copy_confirmation_seconds, self._expire_copy)

    def _cancel_copy_timer(self) -> None:
        if self._copy_timer is not None:
            self._copy_timer.cancel()
            self._copy_timer = None

    def _expire_copy(self) -> None:
        self._copy_timer = None
        self.state = transitions.copy_expired(self.state)

    def download_result(self, directory: str | Path = ".") -> Path | None:
        """Write the current result as design-tokens-<epoch-ms>.json; returns the path written."""
        if self.state.result is None:
            return None
        file_name, body = transitions.export_result(self.state.result, self._clock())
        path = Path(directory) / file_name
        path.write_text(body, encoding="utf-8")
        return path

    def reset(self) -> None:
        self._cancel_copy_timer()
        self.state = transitions.reset(self.state)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return transitions.ANALYZE_FALLBACK_MESSAGE
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return transitions.ANALYZE_FALLBACK_MESSAGE
