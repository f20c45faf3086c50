# fieldstock/modules/item_types/router.py
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import List

from fieldstock.config.database import get_db
from .service import ItemTypesService
from .schemas import (
    ItemTypeCreate, ItemTypeUpdate, ItemTypeResponse,
    ToggleActive, ToggleVisibility, SeedResponse
)

router = APIRouter()


@router.get("", response_model=List[ItemTypeResponse])
async def list_item_types(db: Session = Depends(get_db)):
    """Catalogo completo, incluyendo tipos inactivos u ocultos"""
    service = ItemTypesService(db)
    return await service.list_item_types()


@router.get("/active", response_model=List[ItemTypeResponse])
async def list_active_item_types(db: Session = Depends(get_db)):
    """Tipos activos y visibles, ordenados por sort_order"""
    service = ItemTypesService(db)
    return await service.list_active_item_types()


@router.post("/seed", response_model=SeedResponse)
async def seed_item_types(
    if_empty: bool = Query(False, description="No fallar si el catalogo ya tiene datos"),
    db: Session = Depends(get_db)
):
    """
    Cargar el catalogo por defecto

    - Catalogo vacio: inserta los tipos iniciales
    - Catalogo con datos: 409 `already_seeded`, o no-op con `if_empty=true`
    """
    service = ItemTypesService(db)
    created = await service.seed_defaults(if_empty=if_empty)
    return SeedResponse(
        success=True,
        message="Catalogo sembrado" if created else "El catalogo ya estaba cargado",
        created_count=created
    )


@router.get("/{item_type_id}", response_model=ItemTypeResponse)
async def get_item_type(
    item_type_id: str = Path(..., description="ID del tipo de producto"),
    db: Session = Depends(get_db)
):
    service = ItemTypesService(db)
    return await service.get_item_type(item_type_id)


@router.post("", response_model=ItemTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_item_type(data: ItemTypeCreate, db: Session = Depends(get_db)):
    service = ItemTypesService(db)
    return await service.create_item_type(data)


@router.patch("/{item_type_id}", response_model=ItemTypeResponse)
async def update_item_type(
    patch: ItemTypeUpdate,
    item_type_id: str = Path(...),
    db: Session = Depends(get_db)
):
    service = ItemTypesService(db)
    return await service.update_item_type(item_type_id, patch)


@router.patch("/{item_type_id}/toggle-active", response_model=ItemTypeResponse)
async def toggle_item_type_active(
    body: ToggleActive,
    item_type_id: str = Path(...),
    db: Session = Depends(get_db)
):
    service = ItemTypesService(db)
    return await service.toggle_active(item_type_id, body.is_active)


@router.patch("/{item_type_id}/toggle-visibility", response_model=ItemTypeResponse)
async def toggle_item_type_visibility(
    body: ToggleVisibility,
    item_type_id: str = Path(...),
    db: Session = Depends(get_db)
):
    service = ItemTypesService(db)
    return await service.toggle_visibility(item_type_id, body.is_visible)
