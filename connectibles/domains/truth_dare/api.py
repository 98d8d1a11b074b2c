# connectibles/domains/truth_dare/api.py
from typing import List, Optional

from fastapi import APIRouter, Depends

from connectibles.domains.auth.dependencies import get_active_user, get_optional_user
from connectibles.domains.truth_dare import service
from connectibles.domains.truth_dare.schemas import (
    AnswerRequest,
    ChoiceRequest,
    CreateSessionRequest,
    TruthDareSessionResponse,
)

router = APIRouter()


@router.post("/sessions", response_model=TruthDareSessionResponse)
async def create_session(request: CreateSessionRequest, user=Depends(get_active_user)):
    """Start a game with a connection, or resume the one already running"""
    return await service.create_session(user, request.opponent_id)


@router.get("/sessions/active", response_model=List[TruthDareSessionResponse])
async def get_active_sessions(user=Depends(get_optional_user)):
    return await service.get_active_sessions(user)


@router.get("/sessions/{session_id}", response_model=Optional[TruthDareSessionResponse])
async def get_session(session_id: str, user=Depends(get_optional_user)):
    return await service.get_session(user, session_id)


@router.post("/sessions/{session_id}/choice", response_model=TruthDareSessionResponse)
async def make_choice(session_id: str, request: ChoiceRequest, user=Depends(get_active_user)):
    return await service.make_choice(user, session_id, request.choice, request.question)


@router.post("/sessions/{session_id}/answer", response_model=TruthDareSessionResponse)
async def answer_round(session_id: str, request: AnswerRequest, user=Depends(get_active_user)):
    return await service.answer_round(user, session_id, request.answer)


@router.post("/sessions/{session_id}/complete", response_model=TruthDareSessionResponse)
async def complete_round(session_id: str, user=Depends(get_active_user)):
    return await service.complete_round(user, session_id)


@router.post("/sessions/{session_id}/skip", response_model=TruthDareSessionResponse)
async def skip_round(session_id: str, user=Depends(get_active_user)):
    return await service.skip_round(user, session_id)


@router.post("/sessions/{session_id}/end", response_model=TruthDareSessionResponse)
async def end_session(session_id: str, user=Depends(get_active_user)):
    return await service.end_session(user, session_id)
