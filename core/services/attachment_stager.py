# =============================================================================
# core/services/attachment_stager.py - Scratch-Directory File Staging
# =============================================================================
# Writes uploaded files to a local scratch directory so the mail relay can
# read them, and deletes them again afterwards.
#
# Staged names are "<receipt-ms>-<sanitized original name>". Each request
# owns only the file it created; files are created exclusively so two
# uploads never write into the same path.
# =============================================================================

import logging
import os
from pathlib import Path
from typing import Callable

from starlette.datastructures import UploadFile

from app.exceptions import AttachmentTooLargeError, StorageError
from core.models.submission import StagedAttachment
from lib.utils import original_basename, receipt_timestamp, sanitize_filename

logger = logging.getLogger(__name__)

# Bytes read from the upload per write
CHUNK_SIZE = 64 * 1024

# Attempts at finding a free name when the same file arrives twice in one ms
MAX_NAME_ATTEMPTS = 100


class AttachmentStager:
    """
    Stages uploads into `upload_dir` and discards them on request.

    Args:
        upload_dir: Scratch directory (created by ensure_directory)
        max_size_bytes: Uploads larger than this are rejected
        clock: Returns the receipt timestamp in milliseconds
    """

    def __init__(
        self,
        upload_dir: Path,
        max_size_bytes: int,
        clock: Callable[[], int] = receipt_timestamp,
    ):
        self.upload_dir = Path(upload_dir)
        self.max_size_bytes = max_size_bytes
        self._clock = clock

    def ensure_directory(self) -> None:
        """
        Create the scratch directory if it is missing.

        Safe to call concurrently and repeatedly.

        Raises:
            StorageError: If the directory cannot be created
        """
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(str(self.upload_dir), str(e))

    def is_writable(self) -> bool:
        return self.upload_dir.is_dir() and os.access(self.upload_dir, os.W_OK)

    async def stage(self, upload: UploadFile) -> StagedAttachment:
        """
        Write an uploaded file to the scratch directory.

        Args:
            upload: The multipart file part

        Returns:
            StagedAttachment with the staged path and the original filename

        Raises:
            AttachmentTooLargeError: If the upload exceeds max_size_bytes
            StorageError: If the file cannot be written
        """
        original_filename = original_basename(upload.filename) or "attachment"
        path, handle = self._open_unique(sanitize_filename(original_filename))

        written = 0
        try:
            with handle:
                while chunk := await upload.read(CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_size_bytes:
                        raise AttachmentTooLargeError(
                            original_filename,
                            self.max_size_bytes // (1024 * 1024),
                        )
                    handle.write(chunk)
        except AttachmentTooLargeError:
            self._remove_partial(path)
            raise
        except OSError as e:
            self._remove_partial(path)
            raise StorageError(str(path), str(e))

        logger.info(f"Staged upload {original_filename!r} at {path} ({written} bytes)")
        return StagedAttachment(staged_path=path, original_filename=original_filename)

    def discard(self, staged_path: Path) -> None:
        """
        Delete a staged file.

        A file that is already gone is logged and ignored.

        Raises:
            StorageError: If the file exists but cannot be deleted
        """
        try:
            Path(staged_path).unlink()
            logger.info(f"Discarded staged file {staged_path}")
        except FileNotFoundError:
            logger.warning(f"Staged file already gone: {staged_path}")
        except OSError as e:
            raise StorageError(str(staged_path), str(e))

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _open_unique(self, safe_name: str):
        """Exclusively create "<ts>-<name>", bumping ts while the name is taken."""
        timestamp = self._clock()
        for attempt in range(MAX_NAME_ATTEMPTS):
            path = self.upload_dir / f"{timestamp + attempt}-{safe_name}"
            try:
                return path, open(path, "xb")
            except FileExistsError:
                continue
            except OSError as e:
                raise StorageError(str(path), str(e))

        raise StorageError(
            str(self.upload_dir / safe_name),
            f"no free staged name after {MAX_NAME_ATTEMPTS} attempts",
        )

    def _remove_partial(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Could not remove partial upload {path}: {e}")
