from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from app.data.geo import get_district, get_thanas_by_district, is_dhaka_district, search_districts

router = APIRouter()


@router.get("/districts")
def districts(q: str = ""):
    return [dict(asdict(d), is_dhaka=is_dhaka_district(d.id)) for d in search_districts(q)]


@router.get("/districts/{district_id}/thanas")
def thanas(district_id: str):
    if get_district(district_id) is None:
        raise HTTPException(status_code=404, detail="District not found")
    return [asdict(t) for t in get_thanas_by_district(district_id)]
