from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .config import load_settings
from .errors import EmptyResultError, ValidationError
from .media.reference import MediaReference, is_media_reference
from .pipeline import generate_tattoo_design, simulate_tattoo_placement


def _media_arg(value: str) -> str:
    """Accept either a data URI or a path to a local image file."""
    if is_media_reference(value):
        return value
    return MediaReference.from_path(value).uri


def _write_media(uri: str, out: str) -> int:
    data = MediaReference.parse(uri).data
    path = Path(out)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return len(data)


def _fail(exc: Exception):
    print(f"Error: {exc}", file=sys.stderr)
    sys.exit(1)


def _summary(flow: str, uri: str, out: str) -> dict:
    media = MediaReference.parse(uri)
    summary = {"flow": flow, "mime_type": media.mime_type, "bytes": len(media.data), "out": None}
    if out:
        _write_media(uri, out)
        summary["out"] = out
    return summary


def main():
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    p = argparse.ArgumentParser(prog="tattoo-studio")
    sub = p.add_subparsers(dest="cmd", required=False)

    gen = sub.add_parser("generate", help="Generate a tattoo design from a text prompt")
    gen.add_argument("--prompt", required=True, help="Description of the tattoo (at least 10 characters)")
    gen.add_argument("--out", default="tattoo-design.png", help="Where to save the generated image")
    gen.add_argument("--llm", default="gemini", choices=["gemini", "mock"], help="Model backend")

    sim = sub.add_parser("simulate", help="Preview a tattoo design on a body-part photo")
    sim.add_argument("--tattoo", required=True, help="Tattoo image path or data URI")
    sim.add_argument("--body-part", required=True, help="Target body part (e.g. forearm)")
    sim.add_argument("--photo", required=True, help="Body-part photo path or data URI")
    sim.add_argument("--out", default="", help="Where to save the simulated image")
    sim.add_argument("--llm", default="gemini", choices=["gemini", "mock"], help="Model backend")

    args = p.parse_args()

    if not args.cmd:
        p.print_help()
        sys.exit(0)

    if args.cmd == "simulate":
        try:
            request = {
                "tattooDataUri": _media_arg(args.tattoo),
                "bodyPart": args.body_part,
                "bodyPartPhotoUri": _media_arg(args.photo),
            }
        except (FileNotFoundError, ValueError) as e:
            _fail(e)

    try:
        if args.cmd == "generate":
            result = asyncio.run(
                generate_tattoo_design({"prompt": args.prompt}, llm_backend=args.llm)
            )
            uri = result.tattoo_design.url
        else:
            result = asyncio.run(simulate_tattoo_placement(request, llm_backend=args.llm))
            uri = result.simulated_tattoo_uri
    except (ValidationError, EmptyResultError) as e:
        _fail(e)

    print(json.dumps(_summary(args.cmd, uri, args.out), indent=2))


if __name__ == "__main__":
    main()
