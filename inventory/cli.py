from __future__ import annotations

import argparse
import asyncio

from inventory.core.config import Settings
from inventory.core.logging_config import configure_logging
from inventory.services.factory import open_inventory


async def sweep_blobs(settings: Settings) -> list[str]:
    service = await open_inventory(settings)
    try:
        return list(await service.sweep_orphans())
    finally:
        await service.repository.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Inventory service maintenance CLI")
    parser.add_argument(
        "command",
        choices=["sweep-blobs"],
        help="Command to run",
    )
    parser.add_argument("-c", "--cache", type=str, default=None, help="Path to cache directory")
    parser.add_argument("--backend", choices=["json", "sql"], default=None, help="Item store backend")
    args = parser.parse_args(argv)

    overrides = {}
    if args.cache:
        overrides["CACHE_DIR"] = args.cache
    if args.backend:
        overrides["STORAGE_BACKEND"] = args.backend
    settings = Settings(**overrides)
    configure_logging(settings)

    if args.command == "sweep-blobs":
        removed = asyncio.run(sweep_blobs(settings))
        for blob_name in removed:
            print(f"Removed unreferenced photo {blob_name}")
        print(f"Removed {len(removed)} unreferenced photos")


if __name__ == "__main__":
    main()
