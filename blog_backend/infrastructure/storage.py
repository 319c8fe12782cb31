# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Cover image storage adapters."""

from __future__ import annotations

import hashlib
import secrets
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlsplit

import httpx
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from blog_backend.domain.posts.entities import CoverUpload
from blog_backend.domain.posts.repositories import BlobStore
from blog_backend.shared.config import StorageConfig
from blog_backend.shared.errors import UploadFailedError
from blog_backend.shared.logging import logger

LOCAL_URL_PREFIX = "uploads"


class LocalBlobStore(BlobStore):
    """Stores files on local filesystem within configured root."""

    def __init__(self, root: Path, *, url_prefix: str = LOCAL_URL_PREFIX) -> None:
        self._root = root
        self._url_prefix = url_prefix.strip("/")
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, relative_path: str) -> Path:
        path = (self._root / relative_path).resolve()
        if not path.is_relative_to(self._root.resolve()):
            msg = "Attempted directory traversal outside storage root"
            raise ValueError(msg)
        return path

    def store(self, upload: CoverUpload) -> str:
        name = secrets.token_hex(16)
        if upload.extension:
            name = f"{name}.{upload.extension}"
        file_path = self._resolve(name)
        try:
            with file_path.open("wb") as fh:
                shutil.copyfileobj(upload.stream, fh)
        except OSError as exc:
            logger.exception(f"storage.local: write failed path={file_path}")
            file_path.unlink(missing_ok=True)
            raise UploadFailedError("write_failed") from exc
        logger.debug(f"storage.local: write path={file_path} size={file_path.stat().st_size}")
        return f"{self._url_prefix}/{name}"


@dataclass(slots=True, frozen=True)
class CloudinaryCredentials:
    cloud_name: str
    api_key: str
    api_secret: str


def parse_cloudinary_url(url: str) -> CloudinaryCredentials:
    """Split ``cloudinary://<api_key>:<api_secret>@<cloud_name>`` into its parts."""
    parts = urlsplit(url.strip())
    if parts.scheme != "cloudinary":
        raise ValueError("cloudinary_url_scheme")
    cloud_name = parts.hostname or ""
    api_key = unquote(parts.username or "")
    api_secret = unquote(parts.password or "")
    if not (cloud_name and api_key and api_secret):
        raise ValueError("cloudinary_url_incomplete")
    return CloudinaryCredentials(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret)


class _RetryableUploadError(Exception):
    pass


class RemoteImageHostBlobStore(BlobStore):
    """Signed uploads to a Cloudinary-compatible image host; returns the remote URL."""

    API_BASE = "https://api.cloudinary.com/v1_1"

    def __init__(
        self,
        credentials: CloudinaryCredentials,
        *,
        folder: str | None = None,
        timeout: float = 15.0,
        retries: int = 3,
        backoff_base: float = 0.5,
        client: httpx.Client | None = None,
    ) -> None:
        self._credentials = credentials
        self._folder = folder
        self._retries = retries
        self._backoff_base = backoff_base
        self._client = client or httpx.Client(timeout=timeout)

    @property
    def upload_url(self) -> str:
        return f"{self.API_BASE}/{self._credentials.cloud_name}/image/upload"

    def _signed_params(self) -> dict[str, str]:
        params = {"timestamp": str(int(time.time()))}
        if self._folder:
            params["folder"] = self._folder
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        signature = hashlib.sha1(
            (to_sign + self._credentials.api_secret).encode("utf-8")
        ).hexdigest()
        return {**params, "api_key": self._credentials.api_key, "signature": signature}

    def _post(self, upload: CoverUpload, data: bytes) -> httpx.Response:
        response = self._client.post(
            self.upload_url,
            data=self._signed_params(),
            files={"file": (upload.filename, data, upload.content_type)},
        )
        if response.status_code >= 500:
            raise _RetryableUploadError(f"status={response.status_code}")
        return response

    def store(self, upload: CoverUpload) -> str:
        data = upload.stream.read()
        retry = Retrying(
            stop=stop_after_attempt(self._retries),
            wait=wait_exponential(multiplier=self._backoff_base, max=8.0),
            retry=retry_if_exception_type((httpx.TransportError, _RetryableUploadError)),
            reraise=False,
        )
        try:
            for attempt in retry:
                with attempt:
                    logger.debug(
                        f"storage.remote: attempt={attempt.retry_state.attempt_number} "
                        f"file={upload.filename}"
                    )
                    response = self._post(upload, data)
        except RetryError as exc:
            logger.error(f"storage.remote: upload failed after {self._retries} attempts")
            raise UploadFailedError("unavailable") from exc
        except httpx.HTTPError as exc:
            logger.error(f"storage.remote: upload failed ({type(exc).__name__})")
            raise UploadFailedError("unavailable") from exc

        if response.status_code != httpx.codes.OK:
            logger.warning(f"storage.remote: rejected status={response.status_code}")
            raise UploadFailedError("rejected")

        try:
            locator = response.json()["secure_url"]
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("storage.remote: malformed response")
            raise UploadFailedError("malformed_response") from exc

        logger.info(f"storage.remote: stored file={upload.filename} size={len(data)}")
        return str(locator)


def build_blob_store(config: StorageConfig) -> BlobStore:
    if config.backend == "cloudinary":
        if not config.cloudinary_url:
            raise ValueError("CLOUDINARY_URL is required for STORAGE_BACKEND=cloudinary")
        return RemoteImageHostBlobStore(
            parse_cloudinary_url(config.cloudinary_url),
            folder=config.cloudinary_folder,
            timeout=config.upload_timeout,
            retries=config.upload_retries,
        )
    return LocalBlobStore(config.upload_dir)


__all__ = [
    "CloudinaryCredentials",
    "LocalBlobStore",
    "RemoteImageHostBlobStore",
    "build_blob_store",
    "parse_cloudinary_url",
]
