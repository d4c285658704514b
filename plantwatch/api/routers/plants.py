"""Plants router — CRUD endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response

from plantwatch.api.deps import get_service
from plantwatch.api.schemas import (
    ErrorResponse,
    PlantData,
    PlantEnvelope,
    PlantListData,
    PlantListEnvelope,
    PlantResponse,
)
from plantwatch.core.core import PlantCare
from plantwatch.core.repository import PlantConflict
from plantwatch.core.validation import PlantIn

router = APIRouter()

PlantName = Annotated[str, Path(min_length=1, description="Unique plant name")]

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


def _plant_envelope(plant) -> PlantEnvelope:
    return PlantEnvelope(data=PlantData(plant=PlantResponse.model_validate(plant)))


@router.get("", response_model=PlantListEnvelope)
async def list_plants(service: PlantCare = Depends(get_service)):
    """List all plants."""
    plants = service.plants.list()
    return PlantListEnvelope(
        data=PlantListData(plants=[PlantResponse.model_validate(p) for p in plants])
    )


@router.post("", response_model=PlantEnvelope, status_code=201, responses=ERROR_RESPONSES)
async def create_plant(
    body: PlantIn,
    service: PlantCare = Depends(get_service),
):
    """Register a new plant."""
    try:
        plant = service.plants.create(body.model_dump())
    except PlantConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _plant_envelope(plant)


@router.get("/{name}", response_model=PlantEnvelope, responses=ERROR_RESPONSES)
async def get_plant(
    name: PlantName,
    service: PlantCare = Depends(get_service),
):
    """Get plant details."""
    plant = service.plants.get_by_name(name)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return _plant_envelope(plant)


@router.put("/{name}", response_model=PlantEnvelope, responses=ERROR_RESPONSES)
async def update_plant(
    body: PlantIn,
    name: PlantName,
    service: PlantCare = Depends(get_service),
):
    """Replace a plant's details, including its name."""
    try:
        plant = service.plants.update(name, body.model_dump())
    except PlantConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return _plant_envelope(plant)


@router.delete("/{name}", status_code=204, response_class=Response, responses=ERROR_RESPONSES)
async def delete_plant(
    name: PlantName,
    service: PlantCare = Depends(get_service),
):
    """Delete a plant permanently."""
    if not service.plants.delete(name):
        raise HTTPException(status_code=404, detail="Plant not found")
    return Response(status_code=204)
