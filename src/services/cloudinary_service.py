"""
Cloudinary service for uploading page images.
"""
import logging
import os

import cloudinary
import cloudinary.uploader
from fastapi.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

_cloudinary_configured = False


class CloudinaryUploadError(Exception):
    """Fallo al subir un archivo a Cloudinary."""


def is_cloudinary_configured() -> bool:
    return all(
        os.getenv(name)
        for name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET")
    )


def _ensure_cloudinary_configured():
    """Configure Cloudinary lazily to ensure env vars are loaded."""
    global _cloudinary_configured
    if _cloudinary_configured:
        return

    if not is_cloudinary_configured():
        raise CloudinaryUploadError(
            "Faltan CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY o CLOUDINARY_API_SECRET"
        )

    cloudinary.config(
        cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME"),
        api_key=os.getenv("CLOUDINARY_API_KEY"),
        api_secret=os.getenv("CLOUDINARY_API_SECRET"),
        secure=True
    )
    _cloudinary_configured = True


async def upload_image(contents: bytes, folder: str, public_id: str) -> dict:
    """
    Upload an image to Cloudinary, as is (no transformations).

    Args:
        contents: Raw bytes of the file
        folder: The folder in Cloudinary to store the image
        public_id: Unique name of the asset inside the folder

    Returns:
        dict with 'url' (secure public URL) and 'public_id'
    """
    _ensure_cloudinary_configured()
    try:
        # El SDK es bloqueante: se ejecuta fuera del event loop
        result = await run_in_threadpool(
            cloudinary.uploader.upload,
            contents,
            folder=folder,
            public_id=public_id,
            resource_type="image",
            # Never replace an existing asset
            overwrite=False,
        )
    except Exception as e:
        raise CloudinaryUploadError(f"Error uploading to Cloudinary: {str(e)}") from e

    url = result.get("secure_url")
    if not url:
        raise CloudinaryUploadError("Cloudinary no devolvió una URL pública")

    logger.info(f"Imagen subida a Cloudinary: {result.get('public_id')}")
    return {
        "url": url,
        "public_id": result.get("public_id"),
    }
