from fastapi import APIRouter, HTTPException

from models.country import CountryPolicy
from services import country_service

router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=list[CountryPolicy])
async def list_countries():
    return list(country_service.get_all())


@router.get("/{country_id}", response_model=CountryPolicy)
async def get_country(country_id: str):
    country = country_service.get_by_id(country_id)
    if not country:
        raise HTTPException(status_code=404, detail="Country not found")
    return country
