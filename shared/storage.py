"""
Storage utilities.

Supabase Storage upload for finished renders.
"""

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional
from supabase import create_client
from shared.config import settings
from shared.errors import RetryableError, ConfigError
from shared.retry import retry_with_backoff
from shared.logging import get_logger

logger = get_logger("storage")

# Maximum size accepted for a final render (in bytes)
MAX_RENDER_SIZE = 200 * 1024 * 1024  # 200MB


class StorageClient:
    """Supabase Storage client for publishing renders."""

    def __init__(self, bucket: Optional[str] = None):
        """
        Initialize storage client.

        Args:
            bucket: Bucket name (defaults to VIDEO_OUTPUTS_BUCKET)

        Raises:
            ConfigError: If Supabase is not configured or the client cannot be created
        """
        if not settings.storage_enabled:
            raise ConfigError("Supabase storage is not configured")
        try:
            self.client = create_client(
                settings.supabase_url,
                settings.supabase_service_key
            )
            self.storage = self.client.storage
            self.bucket = bucket or settings.video_outputs_bucket
        except Exception as e:
            raise ConfigError(f"Failed to initialize storage client: {str(e)}") from e

    async def _execute_sync(self, func: Callable[[], Any]) -> Any:
        """
        Execute a synchronous Supabase storage operation off the event loop.

        Args:
            func: Synchronous function to execute

        Returns:
            Function result
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func)

    @retry_with_backoff(max_attempts=3, base_delay=2)
    async def upload_file(self, local_path: Path, remote_path: str) -> None:
        """
        Upload a local file.

        Args:
            local_path: File on disk
            remote_path: Object key inside the bucket

        Raises:
            RetryableError: If upload fails after retries
        """
        file_data = local_path.read_bytes()
        if len(file_data) > MAX_RENDER_SIZE:
            raise ConfigError(
                f"Render too large to upload ({len(file_data) / (1024 * 1024):.2f} MB)"
            )

        try:
            def _upload():
                return self.storage.from_(self.bucket).upload(
                    path=remote_path,
                    file=file_data,
                    file_options={"content-type": "video/mp4", "upsert": "true"}
                )

            await self._execute_sync(_upload)

            logger.info(
                f"Uploaded file to {self.bucket}/{remote_path}",
                extra={"bucket": self.bucket, "path": remote_path, "size": len(file_data)}
            )
        except Exception as e:
            logger.error(
                f"Failed to upload file to {self.bucket}/{remote_path}: {str(e)}",
                extra={"bucket": self.bucket, "path": remote_path, "error": str(e)}
            )
            raise RetryableError(f"Failed to upload file: {str(e)}") from e

    async def get_signed_url(self, remote_path: str, expires_in: Optional[int] = None) -> str:
        """
        Generate a signed download URL.

        Raises:
            RetryableError: If URL generation fails
        """
        expires_in = expires_in or settings.signed_url_ttl_seconds
        try:
            def _create_signed_url():
                return self.storage.from_(self.bucket).create_signed_url(
                    path=remote_path,
                    expires_in=expires_in
                )

            response = await self._execute_sync(_create_signed_url)
        except Exception as e:
            logger.error(
                f"Failed to generate signed URL for {self.bucket}/{remote_path}: {str(e)}",
                extra={"bucket": self.bucket, "path": remote_path, "error": str(e)}
            )
            raise RetryableError(f"Failed to generate signed URL: {str(e)}") from e

        if isinstance(response, dict):
            return response.get("signedURL") or response.get("signedUrl") or ""
        return str(response) if response else ""


async def publish_render(local_path: Path, render_id: str) -> str:
    """
    Publish a finished render and return its URL.

    Uploads to `renders/{render_id}/final.mp4` when storage is configured;
    otherwise, or when the upload fails, returns a file:// URL for the local
    file so the job can still complete.
    """
    local_url = local_path.resolve().as_uri()

    if not settings.storage_enabled:
        logger.info(
            "Storage not configured, serving render from local disk",
            extra={"render_id": render_id, "path": str(local_path)}
        )
        return local_url

    remote_path = f"renders/{render_id}/final.mp4"
    try:
        client = StorageClient()
        await client.upload_file(local_path, remote_path)
        return await client.get_signed_url(remote_path)
    except (RetryableError, ConfigError) as e:
        logger.warning(
            "Upload failed, using local path",
            extra={"render_id": render_id, "error": str(e)}
        )
        return local_url
