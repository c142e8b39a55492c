import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Protocol

import boto3

from app.config import settings

logger = logging.getLogger(__name__)


@dataclass
class IncomingFile:
    """Upload bytes detached from the web framework's file object."""

    filename: str
    contents: bytes
    content_type: str | None = None


class FileStorage(Protocol):
    def save(self, upload: IncomingFile) -> str:
        """Persist the upload and return the reference to store on the record."""

    def delete(self, reference: str) -> None:
        """Remove a previously saved upload; unknown references are ignored."""


def build_filename(original_name: str | None, stamp: int | None = None) -> str:
    """Name a stored file by upload time in ms plus the original extension."""
    extension = Path(original_name or "").suffix.lower()
    if stamp is None:
        stamp = int(time.time() * 1000)
    return f"{stamp}{extension}"


class LocalFileStorage:
    def __init__(self, upload_dir: str | Path):
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def save(self, upload: IncomingFile) -> str:
        stamp = int(time.time() * 1000)
        while True:
            file_path = self.upload_dir / build_filename(upload.filename, stamp)
            try:
                # exclusive create, never overwrite another upload
                with open(file_path, "xb") as handle:
                    handle.write(upload.contents)
                break
            except FileExistsError:
                stamp += 1
        logger.info("Stored upload %s (%s bytes)", file_path, len(upload.contents))
        return str(file_path)

    def delete(self, reference: str) -> None:
        Path(reference).unlink(missing_ok=True)
        logger.info("Removed upload %s", reference)


class SpacesFileStorage:
    """Uploads to a DigitalOcean Space and returns the public CDN URL."""

    def __init__(self, client, bucket: str, cdn_url: str, base_path: str = ""):
        self.client = client
        self.bucket = bucket
        self.cdn_url = cdn_url.rstrip("/")
        self.base_path = base_path.strip("/")

    def save(self, upload: IncomingFile) -> str:
        filename = build_filename(upload.filename)
        key = f"{self.base_path}/{filename}" if self.base_path else filename
        extra_args = {"ACL": "public-read"}
        if upload.content_type:
            extra_args["ContentType"] = upload.content_type

        self.client.put_object(Bucket=self.bucket, Key=key, Body=upload.contents, **extra_args)
        logger.info("Uploaded %s to space %s", key, self.bucket)
        return f"{self.cdn_url}/{key}"

    def delete(self, reference: str) -> None:
        key = reference.removeprefix(f"{self.cdn_url}/")
        self.client.delete_object(Bucket=self.bucket, Key=key)
        logger.info("Removed %s from space %s", key, self.bucket)


@lru_cache
def get_file_storage() -> FileStorage:
    if settings.STORAGE_BACKEND == "spaces":
        session = boto3.session.Session()
        client = session.client(
            "s3",
            region_name=settings.SPACES_REGION,
            endpoint_url=settings.SPACES_ENDPOINT,
            aws_access_key_id=settings.SPACES_KEY,
            aws_secret_access_key=settings.SPACES_SECRET,
        )
        return SpacesFileStorage(client, settings.SPACES_NAME, settings.SPACES_CDN_URL, settings.SPACES_BASE_PATH)
    return LocalFileStorage(settings.UPLOAD_DIR)
