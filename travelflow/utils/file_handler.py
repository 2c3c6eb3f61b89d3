import logging
import mimetypes
import uuid
from pathlib import Path
from typing import Any, Dict

import aiofiles
from fastapi import UploadFile, HTTPException, status

from travelflow.core.config import settings

logger = logging.getLogger(__name__)

class ReceiptStorage:
    """Stores receipt files on local disk under UPLOAD_PATH/receipts"""

    folder = "receipts"

    allowed_content_types = {
        "application/pdf",
        "image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    }

    def __init__(self):
        self.upload_dir = Path(settings.UPLOAD_PATH)
        self.allowed_extensions = {ext.lower() for ext in settings.ALLOWED_EXTENSIONS}
        self.max_file_size = settings.MAX_FILE_SIZE

    @property
    def receipts_dir(self) -> Path:
        return self.upload_dir / self.folder

    def validate_file(self, file: UploadFile) -> Dict[str, Any]:
        """Validate file type and size, return file info"""
        if not file.filename:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No filename provided"
            )

        extension = Path(file.filename).suffix.lower()
        if extension not in self.allowed_extensions:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported file type. Allowed: {', '.join(sorted(self.allowed_extensions))}"
            )

        content_type = file.content_type or mimetypes.guess_type(file.filename)[0] or ""
        if content_type and content_type != "application/octet-stream" \
                and content_type not in self.allowed_content_types:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported content type: {content_type}"
            )

        # Get file size
        file.file.seek(0, 2)
        file_size = file.file.tell()
        file.file.seek(0)

        if file_size == 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Uploaded file is empty"
            )
        if file_size > self.max_file_size:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File size too large. Max: {self.max_file_size // (1024 * 1024)}MB"
            )

        return {
            "extension": extension,
            "content_type": content_type or "application/octet-stream",
            "file_size": file_size,
        }

    async def save_file(self, file: UploadFile) -> Dict[str, Any]:
        """Save an uploaded receipt under a random name and return where it went"""
        file_info = self.validate_file(file)

        stored_filename = f"{uuid.uuid4()}{file_info['extension']}"
        file_path = self.receipts_dir / stored_filename
        file_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            content = await file.read()
            async with aiofiles.open(file_path, 'wb') as f:
                await f.write(content)
        except Exception as e:
            logger.error(f"Error saving file: {e}")
            if file_path.exists():
                file_path.unlink()  # Clean up on error
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to save file"
            )

        return {
            "original_filename": file.filename,
            "stored_filename": stored_filename,
            "file_type": file_info["content_type"],
            "storage_path": f"{self.folder}/{stored_filename}",
            "public_url": f"/uploads/{self.folder}/{stored_filename}",
        }

    def delete_file(self, storage_path: str) -> bool:
        """Delete a stored receipt, refusing paths outside the upload directory"""
        try:
            base = self.upload_dir.resolve()
            full_path = (self.upload_dir / storage_path).resolve()

            if base not in full_path.parents:
                logger.warning(f"Attempted to delete file outside uploads directory: {storage_path}")
                return False

            if full_path.exists() and full_path.is_file():
                full_path.unlink()
                logger.info(f"Successfully deleted file: {storage_path}")
                return True

            logger.warning(f"File not found: {storage_path}")
            return False

        except OSError as e:
            logger.error(f"Error deleting file {storage_path}: {e}")
            return False
