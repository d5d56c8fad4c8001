"""Client side of jtts: proxy client, preferences, preview and batch generation."""

from jtts.client.api_client import SynthesisClient
from jtts.client.batch import (
    BatchGenerator,
    BatchReport,
    BatchState,
    DirectoryDownloadSink,
    DownloadSink,
    VoiceResult,
    VoiceStatus,
    build_filename,
    sanitize_filename_text,
)
from jtts.client.errors import (
    ClientError,
    GenerationInProgressError,
    SynthesisRequestError,
    ValidationFailedError,
)
from jtts.client.preferences import STORAGE_KEY, FormPreferences, PreferencesStore
from jtts.client.preview import PlaybackSlot, PreviewBoard, PreviewController

__all__ = [
    "SynthesisClient",
    # Batch
    "BatchGenerator",
    "BatchReport",
    "BatchState",
    "DirectoryDownloadSink",
    "DownloadSink",
    "VoiceResult",
    "VoiceStatus",
    "build_filename",
    "sanitize_filename_text",
    # Errors
    "ClientError",
    "GenerationInProgressError",
    "SynthesisRequestError",
    "ValidationFailedError",
    # Preferences
    "STORAGE_KEY",
    "FormPreferences",
    "PreferencesStore",
    # Preview
    "PlaybackSlot",
    "PreviewBoard",
    "PreviewController",
]
