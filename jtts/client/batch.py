"""Multi-voice batch generation.

BatchGenerator walks the selected voices in selection order and, strictly one
at a time, downloads an MP3 for each voice and hands it to a DownloadSink.
Request i+1 is never issued before request i has completed or failed.

State machine:
    IDLE -> VALIDATING -> VALIDATION_FAILED -> IDLE
    IDLE -> VALIDATING -> GENERATING -> (REQUESTING -> DOWNLOADING)* -> DONE -> IDLE
    GENERATING / REQUESTING -> FAILED -> IDLE
"""

import asyncio
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol

from jtts.client.api_client import SynthesisClient
from jtts.client.errors import (
    ClientError,
    GenerationInProgressError,
    ValidationFailedError,
)
from jtts.client.preferences import FormPreferences
from jtts.core.voices import get_voice
from jtts.utils.logging import get_logger
from jtts.utils.timing import Timer

logger = get_logger("client")

FILENAME_TEXT_LIMIT = 30

# Characters not allowed in file names on common filesystems, plus control characters
_ILLEGAL_FILENAME_CHARS = re.compile(r'[/\\?%*:|"<>\x00-\x1f]')


class BatchState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    VALIDATION_FAILED = "validation_failed"
    GENERATING = "generating"
    REQUESTING = "requesting"
    DOWNLOADING = "downloading"
    DONE = "done"
    FAILED = "failed"


class VoiceStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class VoiceResult:
    """Outcome for one voice of a batch."""

    voice_id: str
    status: VoiceStatus
    filename: str | None = None
    path: Path | None = None
    error: str | None = None


@dataclass
class BatchReport:
    """Per-voice outcomes of one batch, in selection order."""

    results: list[VoiceResult] = field(default_factory=list)
    cancelled: bool = False

    @property
    def succeeded(self) -> list[VoiceResult]:
        return [r for r in self.results if r.status == VoiceStatus.SUCCESS]

    @property
    def failed(self) -> list[VoiceResult]:
        return [r for r in self.results if r.status == VoiceStatus.FAILED]

    @property
    def ok(self) -> bool:
        return not self.cancelled and all(r.status == VoiceStatus.SUCCESS for r in self.results)

    @property
    def first_error(self) -> str | None:
        failed = self.failed
        return failed[0].error if failed else None


class DownloadSink(Protocol):
    """Where generated files are saved."""

    def save(self, filename: str, data: bytes) -> Path: ...


class DirectoryDownloadSink:
    """Save files into a directory, suffixing ' (n)' instead of overwriting."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory).expanduser()

    def save(self, filename: str, data: bytes) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / filename
        stem, suffix = target.stem, target.suffix
        counter = 1
        while target.exists():
            target = self.directory / f"{stem} ({counter}){suffix}"
            counter += 1
        target.write_bytes(data)
        return target


def sanitize_filename_text(text: str, limit: int = FILENAME_TEXT_LIMIT) -> str:
    """Truncate text to `limit` characters and replace illegal filename characters with '-'."""
    return _ILLEGAL_FILENAME_CHARS.sub("-", text.strip()[:limit])


def build_filename(text: str, voice_name: str) -> str:
    """File name for one voice: '<sanitized text prefix>_<voice display name>.mp3'."""
    return f"{sanitize_filename_text(text)}_{sanitize_filename_text(voice_name, limit=64)}.mp3"


StateListener = Callable[[BatchState], None]

_ACTIVE_STATES = frozenset({
    BatchState.VALIDATING,
    BatchState.GENERATING,
    BatchState.REQUESTING,
    BatchState.DOWNLOADING,
})


class BatchGenerator:
    """
    Generate and save one MP3 per selected voice.

    Args:
        client: Synthesis proxy client
        sink: Where downloaded audio is saved
        stop_on_error: Stop at the first failing voice (remaining voices are
            reported as skipped); when False, keep going and report every failure
        on_state_change: Optional listener called on every state transition
    """

    def __init__(
        self,
        client: SynthesisClient,
        sink: DownloadSink,
        stop_on_error: bool = True,
        on_state_change: StateListener | None = None,
    ) -> None:
        self._client = client
        self._sink = sink
        self.stop_on_error = stop_on_error
        self._on_state_change = on_state_change
        self._state = BatchState.IDLE
        self._inflight: asyncio.Task[bytes] | None = None
        self._cancel_requested = False

    @property
    def state(self) -> BatchState:
        return self._state

    @property
    def is_generating(self) -> bool:
        return self._state in _ACTIVE_STATES

    def _set_state(self, state: BatchState) -> None:
        self._state = state
        if self._on_state_change is not None:
            self._on_state_change(state)

    @staticmethod
    def validate(preferences: FormPreferences) -> None:
        """
        Raises:
            ValidationFailedError: If text is blank or no voice is selected
        """
        if not preferences.text.strip():
            raise ValidationFailedError("Please enter some Japanese text")
        if not preferences.selected_voice_ids:
            raise ValidationFailedError("Please select at least one voice")

    def cancel(self) -> None:
        """Abort the running batch after the in-flight request is cancelled."""
        if not self.is_generating:
            return
        self._cancel_requested = True
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

    async def generate(self, preferences: FormPreferences) -> BatchReport:
        """
        Run one batch.

        Raises:
            GenerationInProgressError: If a batch is already running
            ValidationFailedError: If preconditions fail; no request is made
        """
        if self.is_generating:
            raise GenerationInProgressError()

        self._cancel_requested = False
        self._set_state(BatchState.VALIDATING)
        try:
            self.validate(preferences)
        except ValidationFailedError as e:
            logger.info("Batch validation failed", error=e.message)
            self._set_state(BatchState.VALIDATION_FAILED)
            self._set_state(BatchState.IDLE)
            raise

        voice_ids = list(preferences.selected_voice_ids)
        report = BatchReport()
        self._set_state(BatchState.GENERATING)
        logger.info("Starting batch", voice_count=len(voice_ids), stop_on_error=self.stop_on_error)

        try:
            with Timer("batch", log_level="info", logger=logger):
                for index, voice_id in enumerate(voice_ids):
                    if self._cancel_requested:
                        report.cancelled = True
                        report.results.extend(
                            VoiceResult(v, VoiceStatus.SKIPPED) for v in voice_ids[index:]
                        )
                        break

                    result = await self._generate_one(preferences, voice_id)
                    report.results.append(result)

                    if result.status == VoiceStatus.FAILED and (
                        self.stop_on_error or self._cancel_requested
                    ):
                        report.cancelled = self._cancel_requested
                        report.results.extend(
                            VoiceResult(v, VoiceStatus.SKIPPED) for v in voice_ids[index + 1:]
                        )
                        break
        finally:
            self._inflight = None
            if not report.ok:
                self._set_state(BatchState.FAILED)
            else:
                self._set_state(BatchState.DONE)
            self._set_state(BatchState.IDLE)

        logger.info(
            "Batch finished",
            succeeded=len(report.succeeded),
            failed=len(report.failed),
            cancelled=report.cancelled,
        )
        return report

    async def _generate_one(self, preferences: FormPreferences, voice_id: str) -> VoiceResult:
        voice = get_voice(voice_id)
        if voice is None:
            return VoiceResult(voice_id, VoiceStatus.FAILED, error=f"Unknown voice: {voice_id}")

        self._set_state(BatchState.REQUESTING)
        fetch = asyncio.ensure_future(
            self._client.fetch_audio(
                preferences.text,
                voice_id,
                speed=preferences.speed,
                pitch=preferences.pitch,
            )
        )
        self._inflight = fetch
        try:
            audio = await fetch
        except asyncio.CancelledError:
            if not self._cancel_requested:
                raise
            return VoiceResult(voice_id, VoiceStatus.FAILED, error="Cancelled")
        except ClientError as e:
            logger.warning("Voice failed", voice_id=voice_id, error=e.message)
            return VoiceResult(voice_id, VoiceStatus.FAILED, error=e.message)
        finally:
            self._inflight = None

        self._set_state(BatchState.DOWNLOADING)
        filename = build_filename(preferences.text, voice.name)
        try:
            path = self._sink.save(filename, audio)
        except OSError as e:
            logger.warning(
                "Saving audio failed", voice_id=voice_id, file_name=filename, error=str(e)
            )
            return VoiceResult(
                voice_id, VoiceStatus.FAILED, filename=filename, error=f"Could not save {filename}"
            )

        logger.info("Voice downloaded", voice_id=voice_id, file_name=path.name)
        return VoiceResult(voice_id, VoiceStatus.SUCCESS, filename=filename, path=path)
