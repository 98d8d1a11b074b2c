from typing import List

from fastapi import APIRouter, Depends

from connectibles.domains.auth.dependencies import get_optional_user
from connectibles.domains.matching import service
from connectibles.domains.matching.schemas import MatchResponse

router = APIRouter()


def _to_response(matches) -> List[MatchResponse]:
    return [MatchResponse.model_validate(m) for m in matches]


@router.get("", response_model=List[MatchResponse])
async def get_matches(user=Depends(get_optional_user)):
    """Students ranked by shared interests"""
    return _to_response(await service.get_matches(user))


@router.get("/reverse", response_model=List[MatchResponse])
async def get_reverse_matches(user=Depends(get_optional_user)):
    """Students most likely to be interested in the caller"""
    return _to_response(await service.get_reverse_matches(user))


@router.get("/explore", response_model=List[MatchResponse])
async def get_explore_matches(user=Depends(get_optional_user)):
    """A random handful of students the caller has not reached yet"""
    return _to_response(await service.get_explore_matches(user))
