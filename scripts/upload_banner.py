#!/usr/bin/env python3
"""
Upload a banner image to a running banner server.

Example:
    python scripts/upload_banner.py \
        --server http://127.0.0.1:8000 \
        --token "$BANNER_TOKEN" \
        --title "Autumn sale" --alt "Leaves on a storefront" \
        --start 2025-10-01 --end 2025-10-31 \
        banners/autumn.png
"""

from __future__ import annotations

import argparse
import json
import mimetypes
import sys
from datetime import date
from pathlib import Path
from typing import Any, Optional

import httpx


def iso_date(value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value}") from exc


def upload_banner(
    server: str,
    token: str,
    image: Path,
    title: Optional[str] = None,
    alt: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    timeout: float = 120.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> dict[str, Any]:
    form = {"title": title, "alt": alt, "startDate": start, "endDate": end}
    content_type = mimetypes.guess_type(image.name)[0] or "image/png"

    with image.open("rb") as handle, httpx.Client(base_url=server, timeout=timeout, transport=transport) as client:
        print(f"[api] uploading {image} to {client.base_url}")
        response = client.post(
            "/api/upload",
            headers={"Authorization": f"Bearer {token}"},
            data={name: value for name, value in form.items() if value},
            files={"banner": (image.name, handle, content_type)},
        )
    if response.status_code != 200:
        raise SystemExit(f"upload failed: {response.status_code} {response.text}")
    return response.json()


def main() -> None:
    parser = argparse.ArgumentParser(description="Upload a timed banner to the banner server")
    parser.add_argument("image", type=Path, help="Image file to upload")
    parser.add_argument("--server", default="http://127.0.0.1:8000", help="Banner server base URL")
    parser.add_argument("--token", required=True, help="Operator bearer token")
    parser.add_argument("--title")
    parser.add_argument("--alt")
    parser.add_argument("--start", type=iso_date, help="First display day (YYYY-MM-DD)")
    parser.add_argument("--end", type=iso_date, help="Last display day (YYYY-MM-DD)")
    args = parser.parse_args()

    if not args.image.is_file():
        raise SystemExit(f"image not found: {args.image}")

    try:
        result = upload_banner(args.server, args.token, args.image, args.title, args.alt, args.start, args.end)
    except httpx.HTTPError as exc:
        raise SystemExit(f"could not reach {args.server}: {exc}") from exc

    print("[done] upload succeeded")
    print(json.dumps(result, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit("aborted by user")
