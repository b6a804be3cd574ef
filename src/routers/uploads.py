import logging
import uuid

from fastapi import APIRouter, File, HTTPException, UploadFile

from ..config import get_settings
from ..services import cloudinary_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])


@router.post("/upload-image")
async def upload_page_image(image: UploadFile | None = File(None)):
    """
    Sube una imagen para el contenido de las páginas a Cloudinary.
    Retorna la URL pública del archivo subido.
    """
    if image is None:
        raise HTTPException(status_code=400, detail="No se subió ningún archivo")

    if not image.content_type or not image.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="El archivo debe ser una imagen")

    settings = get_settings()
    too_large = HTTPException(
        status_code=413,
        detail=f"La imagen supera el máximo de {settings.max_upload_bytes // (1024 * 1024)} MB",
    )
    if image.size is not None and image.size > settings.max_upload_bytes:
        raise too_large

    # Sin tamaño conocido se lee como máximo un byte más que el límite
    contents = await image.read(settings.max_upload_bytes + 1)
    if len(contents) > settings.max_upload_bytes:
        raise too_large

    # Nombre único: nunca pisa un archivo existente
    public_id = uuid.uuid4().hex

    try:
        result = await cloudinary_service.upload_image(
            contents,
            folder=settings.cloudinary_upload_folder,
            public_id=public_id,
        )
    except cloudinary_service.CloudinaryUploadError as e:
        logger.error(f"Error al subir imagen '{image.filename}': {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error al subir archivo: {str(e)}"
        )

    return {"publicUrl": result["url"]}
