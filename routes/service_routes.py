from fastapi import APIRouter, Depends
from typing import List
from schemas.service import Service, ServiceCreate, ServiceUpdate, ServiceCreated
from schemas.rating import RatingUpdate, RatingRecompute
from schemas.result import UpdateResult, DeleteResult
from crud import service_crud, rating_crud
from config.database import get_db, Database

router = APIRouter(
    prefix="/services",
    tags=["services"]
)

provider_router = APIRouter(
    prefix="/my-services",
    tags=["services"]
)

@router.get("", response_model=List[Service])
async def get_all_services(db: Database = Depends(get_db)):
    return await service_crud.get_all_services()

@router.get("/top", response_model=List[Service])
async def get_top_services(db: Database = Depends(get_db)):
    return await service_crud.get_top_services()

@router.get("/{service_id}", response_model=Service)
async def get_service(service_id: str, db: Database = Depends(get_db)):
    return await service_crud.get_service(service_id)

@router.post("", response_model=ServiceCreated, status_code=201)
async def create_service(service: ServiceCreate, db: Database = Depends(get_db)):
    return await service_crud.create_service(service)

@router.put("/{service_id}", response_model=UpdateResult)
async def update_service(service_id: str, service_data: ServiceUpdate, db: Database = Depends(get_db)):
    """Update only the fields present in the body"""
    return await service_crud.update_service(service_id, service_data)

@router.delete("/{service_id}", response_model=DeleteResult)
async def delete_service(service_id: str, db: Database = Depends(get_db)):
    return await service_crud.delete_service(service_id)

@router.patch("/{service_id}/rating", response_model=UpdateResult)
async def set_service_rating(service_id: str, rating_data: RatingUpdate, db: Database = Depends(get_db)):
    return await service_crud.set_service_rating(service_id, rating_data)

@router.post("/{service_id}/rating/recompute", response_model=RatingRecompute)
async def recompute_service_rating(service_id: str, db: Database = Depends(get_db)):
    """Recalculate the service rating from its rated bookings"""
    return await rating_crud.recompute_service_rating(service_id)

@provider_router.get("/{email}", response_model=List[Service])
async def get_provider_services(email: str, db: Database = Depends(get_db)):
    return await service_crud.get_provider_services(email)
