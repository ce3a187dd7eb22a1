from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable

import requests
from tqdm import tqdm

from .config import ExtractConfig
from .content import ContentFormat
from .engine import GroupMode
from .http_client import FetchError
from .models import PageInfo
from .page import fetch_html, get_page_data_from_html, get_page_info_from_html


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--data-only",
        action="store_true",
        help="Only map meta tags; skip main-content extraction",
    )
    p.add_argument(
        "--content-format",
        choices=[f.value for f in ContentFormat],
        default=None,
        help="Format of the extracted page content (default: text)",
    )
    p.add_argument(
        "--group-mode",
        choices=[m.value for m in GroupMode],
        default=None,
        help=(
            "'first' keeps one entry per repeated group (images, videos, "
            "audios); 'advance' keeps one per occurrence"
        ),
    )
    p.add_argument("--indent", type=int, default=2)
    p.add_argument("-v", "--verbose", action="store_true")


def _config_from_args(args: argparse.Namespace) -> ExtractConfig:
    cfg = ExtractConfig.from_env()
    overrides: dict[str, Any] = {}
    if args.content_format is not None:
        overrides["content_format"] = ContentFormat(args.content_format)
    if args.group_mode is not None:
        overrides["group_mode"] = GroupMode(args.group_mode)
    if getattr(args, "timeout", None) is not None:
        overrides["timeout_s"] = float(args.timeout)
    if getattr(args, "user_agent", None) is not None:
        overrides["user_agent"] = args.user_agent
    return replace(cfg, **overrides)


def _extract(html: bytes, *, cfg: ExtractConfig, data_only: bool) -> dict[str, Any]:
    if data_only:
        return get_page_data_from_html(html, PageInfo(), cfg).to_dict()
    return get_page_info_from_html(html, cfg).to_dict()


def _run(
    sources: list[str],
    load: Callable[[str], bytes],
    *,
    cfg: ExtractConfig,
    data_only: bool,
    indent: int,
) -> int:
    failures = 0
    many = len(sources) > 1
    for source in tqdm(sources, disable=not many, unit="page", file=sys.stderr):
        try:
            payload = _extract(load(source), cfg=cfg, data_only=data_only)
        except (FetchError, OSError, requests.RequestException) as e:
            print(f"{source}: {e}", file=sys.stderr)
            failures += 1
            continue

        if many:
            # JSON Lines when there is more than one input.
            print(json.dumps({"source": source, **payload}, ensure_ascii=False))
        else:
            print(json.dumps(payload, indent=indent, ensure_ascii=False))

    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="og-extract")
    sub = parser.add_subparsers(dest="cmd", required=True)

    file_p = sub.add_parser("file", help="Extract metadata from saved HTML files")
    file_p.add_argument("paths", type=Path, nargs="+")
    _add_common_args(file_p)

    url_p = sub.add_parser("url", help="Fetch pages and extract their metadata")
    url_p.add_argument("urls", nargs="+")
    url_p.add_argument("--timeout", type=float, default=None)
    url_p.add_argument("--user-agent", default=None)
    _add_common_args(url_p)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = _config_from_args(args)
    except ValueError as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.cmd == "file":
        return _run(
            [str(p) for p in args.paths],
            lambda source: Path(source).read_bytes(),
            cfg=cfg,
            data_only=args.data_only,
            indent=args.indent,
        )

    if args.cmd == "url":
        session = requests.Session()
        return _run(
            list(args.urls),
            lambda source: fetch_html(source, cfg, session=session),
            cfg=cfg,
            data_only=args.data_only,
            indent=args.indent,
        )

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
