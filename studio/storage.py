from __future__ import annotations

import logging
import re
import secrets
import time
from pathlib import PurePosixPath

from django.conf import settings
from django.core.files.storage import storages

from .services import StorageError


logger = logging.getLogger(__name__)


GALLERY_BUCKET = "gallery"
PORTFOLIO_BUCKET = "portfolio"
SITE_ASSETS_BUCKET = "site-assets"


def get_bucket(bucket: str):
    return storages[bucket]


def seo_file_slug(text: str) -> str:
    slug = re.sub(r"\s+", "-", (text or "").lower().strip())
    slug = re.sub(r"[^a-z0-9-_]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def safe_file_name(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9.\-_]", "_", name)


def _split_name(filename: str) -> tuple[str, str]:
    p = PurePosixPath(filename or "")
    ext = p.suffix.lstrip(".").lower() or "jpg"
    return p.stem, ext


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def build_gallery_path(category: str | None, filename: str) -> str:
    stem, ext = _split_name(filename)
    name = seo_file_slug(stem) or "image"
    safe_category = seo_file_slug(category or "general") or "general"
    rand = secrets.token_hex(3)
    return f"gallery/{safe_category}/{_timestamp_ms()}_{name}_{rand}.{ext}"


def build_portfolio_path(category: str, title: str, filename: str) -> str:
    stem, ext = _split_name(filename)
    name = seo_file_slug(title.strip() or stem) or "photo"
    return f"{category}/{_timestamp_ms()}-{safe_file_name(name)}.{ext}"


def build_asset_path(folder: str, filename: str) -> str:
    stem, ext = _split_name(filename)
    return f"{folder}/{safe_file_name(stem) or 'asset'}-{_timestamp_ms()}.{ext}"


def upload(bucket: str, path: str, content, *, overwrite: bool = False) -> str:
    """
    Store ``content`` at ``path`` and return the stored path. Without
    ``overwrite`` an existing object is an error rather than a silent rename.
    """
    storage = get_bucket(bucket)
    try:
        if storage.exists(path):
            if not overwrite:
                raise StorageError(f"The resource already exists: {path}")
            storage.delete(path)
        saved = storage.save(path, content)
    except StorageError:
        raise
    except OSError as exc:
        logger.exception("Upload to %s/%s failed", bucket, path)
        raise StorageError(str(exc)) from exc
    logger.info("Uploaded %s/%s", bucket, saved)
    return saved


def public_url(bucket: str, path: str) -> str:
    return get_bucket(bucket).url(path)


def remove(bucket: str, paths: list[str]) -> None:
    storage = get_bucket(bucket)
    for path in paths:
        try:
            storage.delete(path)
        except OSError as exc:
            logger.exception("Removing %s/%s failed", bucket, path)
            raise StorageError(str(exc)) from exc


def path_from_url(bucket: str, url: str | None) -> str | None:
    """
    Recover the object path of a legacy row that only kept its public URL.
    """
    if not url:
        return None
    markers = [settings.STUDIO_STORAGE_PUBLIC_MARKER.format(bucket=bucket)]
    base_url = getattr(get_bucket(bucket), "base_url", None)
    if base_url:
        markers.append(base_url)
    for marker in markers:
        idx = url.find(marker)
        if idx != -1:
            return url[idx + len(marker):] or None
    return None
