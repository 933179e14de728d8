"""
Audio Object Storage

Bucket-style storage for generated pronunciation audio, backed by a local
directory (one file per object, addressed by an opaque file id).

Usage:
    from services.storage.audio_storage import AudioStorage

    storage = AudioStorage("storage", "pronunciation")
    file_id = await storage.save_audio(audio_bytes, "serendipity.mp3")
    audio = await storage.get_audio(file_id)
"""

import re
import uuid
from pathlib import Path
from typing import Union

import aiofiles
import aiofiles.os

from utils.exceptions import PersistenceError
from utils.logging import get_logger

logger = get_logger(__name__)

# File ids are uuid hex strings; anything else is rejected before touching disk
_FILE_ID_RE = re.compile(r"^[a-f0-9]{32}$")


class AudioStorage:
    """
    Object storage for audio files.

    Attributes:
        bucket_dir: Directory holding the bucket's objects
    """

    def __init__(self, base_dir: Union[str, Path], bucket_id: str = "pronunciation"):
        self.bucket_dir = Path(base_dir) / bucket_id

    def _path_for(self, file_id: str) -> Path:
        if not file_id or not _FILE_ID_RE.match(file_id):
            raise PersistenceError(
                "Invalid audio file id",
                operation="resolve_path",
                details={"file_id": file_id}
            )
        return self.bucket_dir / f"{file_id}.mp3"

    async def save_audio(self, data: bytes, file_name: str) -> str:
        """
        Store audio bytes as a new object.

        Args:
            data: MP3 bytes
            file_name: Human-readable name, kept only for logging

        Returns:
            str: New file id

        Raises:
            PersistenceError: If the write fails
        """
        if not data:
            raise PersistenceError("Refusing to store empty audio", operation="save_audio")

        file_id = uuid.uuid4().hex
        path = self._path_for(file_id)
        temp_path = path.with_suffix(".part")

        try:
            await aiofiles.os.makedirs(self.bucket_dir, exist_ok=True)
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.rename(temp_path, path)
        except Exception as e:
            if await aiofiles.os.path.exists(temp_path):
                await aiofiles.os.remove(temp_path)
            logger.error(f"Error saving audio to storage: {file_name} ({e})")
            raise PersistenceError(
                f"Error saving audio to storage: {e}",
                operation="save_audio",
                details={"file_name": file_name}
            ) from e

        logger.info(f"Stored audio '{file_name}' as {file_id} ({len(data)} bytes)")
        return file_id

    async def get_audio(self, file_id: str) -> bytes:
        """
        Fetch audio bytes by file id.

        Raises:
            PersistenceError: If the object is missing, empty or unreadable
        """
        path = self._path_for(file_id)

        try:
            async with aiofiles.open(path, "rb") as f:
                data = await f.read()
        except Exception as e:
            raise PersistenceError(
                f"Error getting audio data: {e}",
                operation="get_audio",
                details={"file_id": file_id}
            ) from e

        if not data:
            raise PersistenceError("Stored audio is empty", operation="get_audio", details={"file_id": file_id})

        return data

