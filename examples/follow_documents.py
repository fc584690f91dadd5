#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from ffetch import AiohttpHTTPClient, ffetch


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Follow index entries to their HTML documents")
    p.add_argument("url", nargs="?", default="https://www.aem.live/docpages-index.json")
    p.add_argument("limit", nargs="?", type=int, default=5)
    p.add_argument("--field", default="path")
    p.add_argument("--concurrency", type=int, default=5)
    p.add_argument("--allow", action="append", default=[], help="extra document host")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    def report(error: Exception) -> None:
        print(f"Index truncated: {error}")

    async with AiohttpHTTPClient() as client:
        entries = await (
            ffetch(args.url)
            .with_http_client(client)
            .max_concurrency(args.concurrency)
            .allow(args.allow)
            .on_error(report)
            .limit(args.limit)
            .follow(args.field, "document")
            .all()
        )

    print("=" * 65)
    for entry in entries:
        if "document_error" in entry:
            print(f"{entry.get(args.field)!s:40} | ERROR {entry['document_error']}")
            continue
        title = entry["document"].find("title")
        print(f"{entry.get(args.field)!s:40} | {title.get_text(strip=True) if title else '-'}")
    print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
