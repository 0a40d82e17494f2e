from fastapi import APIRouter, Depends
from typing import List, Optional
from schemas.booking import Booking, BookingCreate, BookingCreated
from schemas.rating import RatingUpdate
from schemas.result import UpdateResult, DeleteResult
from crud import booking_crud, rating_crud
from config.database import get_db, Database

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"]
)

@router.post("", response_model=BookingCreated, status_code=201)
async def create_booking(booking: BookingCreate, db: Database = Depends(get_db)):
    return await booking_crud.create_booking(booking)

@router.get("", response_model=List[Booking])
async def get_bookings(email: Optional[str] = None, db: Database = Depends(get_db)):
    return await booking_crud.get_bookings(email)

@router.delete("/{booking_id}", response_model=DeleteResult)
async def delete_booking(booking_id: str, db: Database = Depends(get_db)):
    return await booking_crud.delete_booking(booking_id)

@router.patch("/{booking_id}/rate", response_model=UpdateResult)
async def rate_booking(booking_id: str, rating_data: RatingUpdate, db: Database = Depends(get_db)):
    return await rating_crud.rate_booking(booking_id, rating_data)
