"""
Command-Line Interface for webtts.

Synthesizes text through the configured WebTTS endpoint without running the
HTTP server.

Usage Examples:
    # Single text synthesis
    webtts "Hello world" --out hello.mp3

    # Pick the locale and endpoint
    webtts --text "Bonjour" --locale fr-FR --base-url http://tts.local/api

    # Batch processing from file (one text per line)
    webtts --file inputs.txt --out output_dir/

    # Dry-run mode (prints the request URL, no network call)
    webtts "Test" --dry-run --json

    # Show supported locales, voices and formats
    webtts --voices

Exit Codes:
    0: Success
    1: Synthesis failed (configuration, validation, transport or remote error)

Environment Variables:
    WEBTTS_BASE_URL: Endpoint (overridden by --base-url)
    WEBTTS_TIMEOUT_S: Request timeout in seconds
    WEBTTS_SETTINGS: Settings file (default config/settings.yaml)
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from webtts.core.config import load_settings_or_env
from webtts.core.errors import TTSError
from webtts.core.logging import configure_logging, get_logger, info, set_request_id
from webtts.services.tts_service import WebTTSService
from webtts.tts.formats import AudioFormat
from webtts.tts.stream import AudioStream


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="webtts", description="webtts CLI (WebTTS client)")

    # Input options
    parser.add_argument("text_pos", nargs="?", help="Text to synthesize (positional)")
    parser.add_argument("--text", help="Text to synthesize")
    parser.add_argument("--file", help="Batch input file (1 line = 1 item)")

    # Output options
    parser.add_argument("--out", help="Output path (file, or dir in batch mode)")

    # Request options
    parser.add_argument("--locale", default="en-US", help="Locale tag (default en-US)")
    parser.add_argument("--codec", default="MP3", help="Audio codec (default MP3)")
    parser.add_argument("--base-url", help="Endpoint override")
    parser.add_argument("--settings", help="Settings file")

    # Execution modes
    parser.add_argument("--dry-run", action="store_true",
                        help="Print the request URL without calling the service")
    parser.add_argument("--json", action="store_true",
                        help="Print JSON summary")
    parser.add_argument("--voices", action="store_true",
                        help="Show supported locales, voices and formats")

    return parser.parse_args(argv)


def _load_texts(args: argparse.Namespace) -> List[str]:
    """
    Load input texts from arguments or file.

    Raises:
        SystemExit: If no input provided or conflicting options used.
    """
    text = args.text or args.text_pos

    if args.file:
        if text:
            raise SystemExit("Use --file without --text or positional text.")
        lines = Path(args.file).read_text(encoding="utf-8").splitlines()
        items = [line.strip() for line in lines if line.strip()]
        if not items:
            raise SystemExit("Input file is empty.")
        return items

    if not text:
        raise SystemExit("Provide --text or a positional text.")
    return [text]


def _resolve_output_paths(args: argparse.Namespace, count: int) -> List[Path]:
    # Batch mode: numbered files in the output directory
    if args.file:
        out_dir = Path(args.out or "out")
        out_dir.mkdir(parents=True, exist_ok=True)
        return [out_dir / f"item_{i + 1:03d}.mp3" for i in range(count)]

    out_path = Path(args.out or "out.mp3")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    return [out_path]


def _write_audio(stream: AudioStream, out_path: Path) -> None:
    """Copy the stream to out_path; a partly written file is removed on failure."""
    try:
        with out_path.open("wb") as f:
            for chunk in stream.iter_chunks():
                f.write(chunk)
    except Exception:
        out_path.unlink(missing_ok=True)
        raise


def _capabilities(service: WebTTSService) -> dict:
    return {
        "service": service.id,
        "label": service.label(),
        "locales": sorted(service.available_locales()),
        "voices": [v.to_dict() for v in sorted(service.voices(), key=lambda v: v.uid)],
        "formats": [f.to_dict() for f in service.supported_formats()],
    }


def _print(payload: dict, as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, ensure_ascii=False))
    else:
        print(payload)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Optional list of command-line arguments.

    Returns:
        Exit code (0 for success, 1 for a failed synthesis).
    """
    args = _parse_args(argv)

    configure_logging()
    log = get_logger("webtts.cli")
    set_request_id(str(uuid4())[:12])

    service = WebTTSService(load_settings_or_env(args.settings))
    if args.base_url:
        service.configure({"baseUrl": args.base_url})

    if args.voices:
        _print(_capabilities(service), args.json)
        return 0

    texts = _load_texts(args)
    voice = service.voice_for_locale(args.locale)
    audio_format = AudioFormat.from_codec(args.codec)

    # Dry-run: show what would be requested
    if args.dry_run:
        items = []
        for text in texts:
            item = {"text_len": len(text), "locale": voice.locale if voice else args.locale}
            if service.base_url:
                item["url"] = service.cloud.build_request_url(
                    service.base_url, text.strip(), item["locale"], audio_format.codec,
                )
            items.append(item)
        payload = {"ok": True, "dry_run": True, "configured": service.configured, "items": items}
        info(log, "dry_run", items=len(texts), locale=args.locale)
        _print(payload, args.json)
        print("DRY_RUN_OK")
        return 0

    out_paths = _resolve_output_paths(args, len(texts))
    results = []
    for text, out_path in zip(texts, out_paths):
        info(log, "synth_start", chars=len(text), out=str(out_path))
        try:
            with service.synthesize(text, voice, audio_format) as stream:
                _write_audio(stream, out_path)
        except TTSError as e:
            _print(e.to_dict(), args.json)
            return 1
        results.append({"out": str(out_path), "bytes": out_path.stat().st_size})

    _print({"ok": True, "dry_run": False, "items": results}, args.json)
    print("CLI_OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
