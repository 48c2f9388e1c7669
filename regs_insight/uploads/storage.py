
import asyncio
import logging
import os
import secrets
import shutil
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from fastapi import UploadFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class StoredBlob:
    file_path: str
    original_filename: str


class BlobStorage:
    def __init__(self, root: str | Path, public_prefix: str = "uploads"):
        self.root = Path(root)
        self.public_prefix = public_prefix.strip("/")

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def generate_name(original_filename: str) -> str:
        ext = os.path.splitext(original_filename or "")[1]
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"

    def relative_path(self, name: str) -> str:
        return str(PurePosixPath(self.public_prefix, name))

    def resolve(self, file_path: str) -> Path:
        # only the basename is trusted; stored paths never leave the root
        name = PurePosixPath(file_path.replace("\\", "/")).name
        if not name:
            raise ValueError(f"not a blob path: {file_path!r}")
        return self.root / name

    async def save(self, upload: UploadFile) -> StoredBlob:
        original = upload.filename or ""
        name = self.generate_name(original)
        target = self.root / name

        def _write() -> None:
            self.ensure_root()
            upload.file.seek(0)
            with open(target, "wb") as fh:
                shutil.copyfileobj(upload.file, fh, CHUNK_SIZE)

        await asyncio.to_thread(_write)
        return StoredBlob(file_path=self.relative_path(name), original_filename=original)

    async def remove(self, file_path: str | None) -> bool:
        if not file_path:
            return False
        try:
            await asyncio.to_thread(os.remove, self.resolve(file_path))
        except (OSError, ValueError) as e:
            logger.warning("blob cleanup failed for %s: %s", file_path, e)
            return False
        return True
