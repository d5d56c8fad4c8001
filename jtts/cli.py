"""Command-line interface for jtts.

Commands:
- `serve`: run the synthesis proxy under uvicorn
- `voices`: list the voice catalog grouped by family
- `preview`: synthesize one voice in preview mode and save the decoded audio
- `generate`: run a multi-voice batch and save one MP3 per voice
"""

import asyncio
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from jtts.client import (
    BatchGenerator,
    BatchReport,
    ClientError,
    DirectoryDownloadSink,
    FormPreferences,
    PreferencesStore,
    PreviewController,
    SynthesisClient,
    VoiceStatus,
)
from jtts.config import get_settings
from jtts.core.voices import group_by_family, is_known_voice
from jtts.utils.logging import setup_logging

app = typer.Typer(
    name="jtts",
    no_args_is_help=True,
    help="Japanese text-to-speech generator.",
)


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print a concise error for a failed command and exit with code 1."""
    message = exc.message if isinstance(exc, ClientError) else str(exc)
    typer.secho(f"{command_name} failed: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def _check_voices(voice_ids: list[str]) -> None:
    unknown = [v for v in voice_ids if not is_known_voice(v)]
    if unknown:
        raise typer.BadParameter(f"Unknown voice(s): {', '.join(unknown)}", param_hint="--voice")


@app.callback()
def main(
    log_level: Annotated[
        str, typer.Option("--log-level", help="Log level for client diagnostics.")
    ] = "WARNING",
) -> None:
    """Configure logging before running a command."""
    setup_logging(level=log_level, format=get_settings().log_format)


@app.command("serve")
def serve_command(
    host: Annotated[str | None, typer.Option("--host", help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Bind port.")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes.")] = False,
) -> None:
    """Run the synthesis proxy."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "jtts.main:app",
        host=host or settings.server.host,
        port=port or settings.server.port,
        reload=reload or settings.server.reload,
    )


@app.command("voices")
def voices_command(
    family: Annotated[
        str | None, typer.Option("--family", help="Only list one family, e.g. Wavenet.")
    ] = None,
) -> None:
    """List available voices grouped by family."""
    for group, voices in group_by_family().items():
        if family and group.lower() != family.lower():
            continue
        typer.echo(f"{group} Voices")
        for voice in voices:
            typer.echo(f"  {voice.id:<18} {voice.name} ({voice.gender.value})")


@app.command("preview")
def preview_command(
    voice_id: Annotated[str, typer.Argument(help="Voice id, e.g. ja-JP-Neural2-B.")],
    text: Annotated[
        str | None, typer.Option("--text", help="Text to speak (defaults to saved text).")
    ] = None,
    speed: Annotated[float | None, typer.Option("--speed", help="Speaking rate 0.25-1.0.")] = None,
    pitch: Annotated[int | None, typer.Option("--pitch", help="Pitch -20 to 20.")] = None,
    out: Annotated[
        Path | None, typer.Option("--out", help="Where to write the preview MP3.")
    ] = None,
    server: Annotated[str | None, typer.Option("--server", help="Proxy base URL.")] = None,
) -> None:
    """Synthesize a short preview for one voice."""
    _check_voices([voice_id])
    settings = get_settings()
    preferences = PreferencesStore(settings.client.preferences_path).load()

    async def _run() -> PreviewController:
        async with SynthesisClient(
            server or settings.client.base_url, timeout=settings.client.timeout_seconds
        ) as client:
            controller = PreviewController(client, voice_id)
            await controller.preview(
                text if text is not None else preferences.text,
                speed=speed if speed is not None else preferences.speed,
                pitch=pitch if pitch is not None else preferences.pitch,
            )
            return controller

    controller = asyncio.run(_run())
    slot = controller.slot
    if slot.error or slot.audio is None:
        typer.secho(f"preview failed: {slot.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    target = out or Path(f"preview-{voice_id}.mp3")
    target.write_bytes(slot.audio)
    typer.echo(f"Preview saved: {target} ({len(slot.audio)} bytes)")


def _echo_report(report: BatchReport) -> None:
    for result in report.results:
        if result.status == VoiceStatus.SUCCESS:
            typer.echo(f"[ok]      {result.voice_id} -> {result.path}")
        elif result.status == VoiceStatus.FAILED:
            typer.secho(f"[failed]  {result.voice_id}: {result.error}", fg=typer.colors.RED)
        else:
            typer.secho(f"[skipped] {result.voice_id}", fg=typer.colors.YELLOW)


@app.command("generate")
def generate_command(
    text: Annotated[
        str | None, typer.Option("--text", help="Japanese text (defaults to saved text).")
    ] = None,
    voices: Annotated[
        list[str] | None,
        typer.Option("--voice", help="Voice id; repeat for several. Replaces saved selection."),
    ] = None,
    speed: Annotated[float | None, typer.Option("--speed", help="Speaking rate 0.25-1.0.")] = None,
    pitch: Annotated[int | None, typer.Option("--pitch", help="Pitch -20 to 20.")] = None,
    out: Annotated[Path | None, typer.Option("--out", help="Download directory.")] = None,
    continue_on_error: Annotated[
        bool,
        typer.Option("--continue-on-error", help="Keep going after a voice fails."),
    ] = False,
    server: Annotated[str | None, typer.Option("--server", help="Proxy base URL.")] = None,
) -> None:
    """Generate one MP3 per selected voice, in selection order."""
    if voices:
        _check_voices(voices)

    settings = get_settings()
    store = PreferencesStore(settings.client.preferences_path)
    preferences: FormPreferences = store.load()
    if text is not None:
        preferences.text = text
    if voices:
        preferences.selected_voice_ids = voices
    if speed is not None:
        preferences.speed = speed
    if pitch is not None:
        preferences.pitch = pitch
    store.save(preferences)

    sink = DirectoryDownloadSink(out or Path(settings.client.output_dir))

    async def _run() -> BatchReport:
        async with SynthesisClient(
            server or settings.client.base_url, timeout=settings.client.timeout_seconds
        ) as client:
            generator = BatchGenerator(client, sink, stop_on_error=not continue_on_error)
            return await generator.generate(preferences)

    try:
        report = asyncio.run(_run())
    except ClientError as exc:
        exit_with_command_error("generate", exc)

    _echo_report(report)
    if not report.ok:
        typer.secho(f"Error: {report.first_error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Generated {len(report.succeeded)} file(s) in {sink.directory}")
