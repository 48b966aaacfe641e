from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

import prefs
from schemas.common import Envelope
from schemas.prefs import FavoriteRequest, PrefsCreate, PrefsOut

router = APIRouter(prefix="/api/prefs", tags=["prefs"])


@router.get("", response_model=Envelope)
def prefs_index():
    return Envelope(data=prefs.list_prefs())


@router.post("", response_model=Envelope)
def prefs_create(req: PrefsCreate):
    body = req.model_dump(exclude_none=True)
    try:
        created = prefs.create_prefs(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except prefs.PrefsConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Envelope(data=created)


@router.get("/{username}", response_model=PrefsOut, response_model_by_alias=True)
def prefs_detail(username: str):
    try:
        return prefs.get_prefs(username)
    except prefs.PrefsNotFound:
        raise HTTPException(status_code=404, detail="prefs not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{username}", response_model=PrefsOut, response_model_by_alias=True)
def prefs_update(username: str, body: Dict[str, Any] = Body(...)):
    try:
        return prefs.update_prefs(username, body)
    except prefs.PrefsNotFound:
        raise HTTPException(status_code=404, detail="prefs not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{username}/favorites/{list_name}", response_model=PrefsOut)
def prefs_favorite(username: str, list_name: str, req: FavoriteRequest):
    try:
        return prefs.set_favorite(username, list_name, req.quiz_path, req.value)
    except prefs.PrefsNotFound:
        raise HTTPException(status_code=404, detail="prefs not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
