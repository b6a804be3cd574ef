import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.page import Page
from ..schemas.page_schema import PageCreate, PageOut, PageUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pages", tags=["pages"])

SLUG_TAKEN_DETAIL = {
    "message": "El slug ya está en uso.",
    "errors": {"slug": ["Este slug ya existe."]},
}


def _slug_taken(db: Session, slug: str, exclude_id: int | None = None) -> bool:
    query = db.query(Page.id).filter(Page.slug == slug)
    if exclude_id is not None:
        query = query.filter(Page.id != exclude_id)
    return query.first() is not None


def _get_page_or_404(db: Session, page_id: int) -> Page:
    page = db.query(Page).filter(Page.id == page_id).first()
    if not page:
        raise HTTPException(status_code=404, detail="Página no encontrada")
    return page


def _list_pages(db: Session) -> List[Page]:
    try:
        return db.query(Page).order_by(Page.id.asc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Error al obtener páginas: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al obtener páginas")


@router.get("", response_model=List[PageOut])
def list_pages_no_slash(db: Session = Depends(get_db)):
    return _list_pages(db)


@router.get("/", response_model=List[PageOut])
def list_pages(db: Session = Depends(get_db)):
    return _list_pages(db)


@router.get("/{id_or_slug}", response_model=PageOut)
def get_page(id_or_slug: str, db: Session = Depends(get_db)):
    """
    Busca una página por ID (si el parámetro es numérico) o por slug.
    """
    try:
        if id_or_slug.isdigit():
            page = db.query(Page).filter(Page.id == int(id_or_slug)).first()
        else:
            page = db.query(Page).filter(Page.slug == id_or_slug).first()
    except SQLAlchemyError as e:
        logger.error(f"Error al obtener página '{id_or_slug}': {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al obtener la página")

    if not page:
        raise HTTPException(status_code=404, detail="Página no encontrada")
    return page


@router.post("", response_model=PageOut, status_code=201)
def create_page(payload: PageCreate, db: Session = Depends(get_db)):
    if not payload.title or not payload.slug:
        raise HTTPException(status_code=400, detail="title y slug son requeridos")

    try:
        if _slug_taken(db, payload.slug):
            raise HTTPException(status_code=422, detail=SLUG_TAKEN_DETAIL)

        page = Page(**payload.model_dump())
        db.add(page)
        db.commit()
        db.refresh(page)
        return page
    except IntegrityError:
        # Slug insertado por otra petición entre la verificación y el commit
        db.rollback()
        raise HTTPException(status_code=422, detail=SLUG_TAKEN_DETAIL)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error al crear página: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al crear la página")


@router.put("/{page_id}", response_model=PageOut)
def update_page(page_id: int, payload: PageUpdate, db: Session = Depends(get_db)):
    """
    Actualiza solo los campos enviados en el body.
    """
    data = payload.model_dump(exclude_unset=True)
    # title y slug son NOT NULL: no se pueden vaciar
    for required in ("title", "slug"):
        if required in data and not data[required]:
            raise HTTPException(status_code=400, detail=f"{required} no puede estar vacío")

    try:
        page = _get_page_or_404(db, page_id)
        if "slug" in data and _slug_taken(db, data["slug"], exclude_id=page_id):
            raise HTTPException(status_code=422, detail=SLUG_TAKEN_DETAIL)

        for key, value in data.items():
            setattr(page, key, value)

        db.add(page)
        db.commit()
        db.refresh(page)
        return page
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=422, detail=SLUG_TAKEN_DETAIL)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error al actualizar página {page_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al guardar los cambios de la página")


@router.delete("/{page_id}")
def delete_page(page_id: int, db: Session = Depends(get_db)):
    try:
        page = _get_page_or_404(db, page_id)
        db.delete(page)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error al eliminar página {page_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al eliminar la página")

    return {"message": "Página eliminada correctamente."}
