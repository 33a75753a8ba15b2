"""Photo file storage under the uploads directory."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Protocol

import aiofiles
import aiofiles.os

from inventory.core.exceptions import StorageError


LOG = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
TEMP_SUFFIX = ".part"


class Upload(Protocol):
    """Anything readable like ``fastapi.UploadFile``."""

    async def read(self, size: int = -1) -> bytes: ...


class BlobStore:
    """Stores each upload under a fresh random name.

    Files are written to a hidden ``.<name>.part`` file and renamed into place,
    so a listed blob is always complete.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    async def ensure_dir(self) -> None:
        try:
            await aiofiles.os.makedirs(self.root, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Could not create uploads directory {self.root}: {exc}") from exc

    def resolve_path(self, blob_name: str) -> Path:
        if not blob_name or blob_name.startswith(".") or Path(blob_name).name != blob_name or "\\" in blob_name:
            raise StorageError(f"Invalid photo name {blob_name!r}", details={"blob": blob_name})
        return self.root / blob_name

    async def put(self, upload: Upload) -> str:
        blob_name = uuid.uuid4().hex
        final_path = self.resolve_path(blob_name)
        tmp_path = self.root / f".{blob_name}{TEMP_SUFFIX}"
        size = 0
        try:
            async with aiofiles.open(tmp_path, mode="wb") as f:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    await f.write(chunk)
            await aiofiles.os.replace(tmp_path, final_path)
        except OSError as exc:
            await self._discard(tmp_path)
            raise StorageError(f"Could not store photo: {exc}") from exc
        except BaseException:
            # Client disconnects and cancellation must not leave a .part file either
            await self._discard(tmp_path)
            raise
        LOG.info("photo stored blob=%s bytes=%d", blob_name, size)
        return blob_name

    async def _discard(self, path: Path) -> None:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            LOG.warning("could not remove partial upload path=%s err=%s", path, exc)

    async def delete(self, blob_name: str) -> None:
        path = self.resolve_path(blob_name)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            LOG.debug("photo already gone blob=%s", blob_name)
            return
        except OSError as exc:
            raise StorageError(f"Could not delete photo {blob_name}: {exc}") from exc
        LOG.info("photo deleted blob=%s", blob_name)

    async def exists(self, blob_name: str) -> bool:
        try:
            path = self.resolve_path(blob_name)
        except StorageError:
            return False
        return await aiofiles.os.path.isfile(path)

    async def list_blobs(self) -> list[str]:
        try:
            names = await aiofiles.os.listdir(self.root)
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageError(f"Could not list uploads directory {self.root}: {exc}") from exc
        return sorted(name for name in names if not name.startswith("."))
