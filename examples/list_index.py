#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from ffetch import AiohttpHTTPClient, ffetch


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream entries from a paginated JSON index")
    p.add_argument("url", nargs="?", default="https://www.aem.live/docpages-index.json")
    p.add_argument("limit", nargs="?", type=int, default=20)
    p.add_argument("--chunks", type=int, default=255)
    p.add_argument("--sheet", default=None)
    return p.parse_args()


async def main() -> None:
    args = parse_args()

    async with AiohttpHTTPClient() as client:
        index = ffetch(args.url).chunks(args.chunks).with_http_client(client)
        if args.sheet:
            index = index.sheet(args.sheet)

        print("=" * 65)
        print(f"Index : {args.url}")
        print("=" * 65)
        count = 0
        async for entry in index.limit(args.limit):
            count += 1
            print(f"{count:>4} | {entry.get('path', '-'):40} | {entry.get('title', '')}")
        print("=" * 65)
        print(f"Entries shown: {count}")


if __name__ == "__main__":
    asyncio.run(main())
