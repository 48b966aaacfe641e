from __future__ import annotations

from fastapi import APIRouter, HTTPException

from schemas.common import Envelope
from teachers import (
    SAMPLE_PREFIX,
    TeacherNotFound,
    list_sample_teachers,
    list_teachers,
    load_teacher,
    read_teacher,
)

router = APIRouter(prefix="/api/teachers", tags=["teachers"])


@router.get("")
def teachers_index():
    return list_teachers()


# declared before "/{teacher}" so "samples" is not taken for a teacher name
@router.get("/samples", response_model=Envelope)
def sample_teachers():
    return Envelope(data=list_sample_teachers())


@router.get("/samples/{teacher}", response_model=Envelope)
def sample_teacher(teacher: str):
    try:
        return Envelope(data=read_teacher(SAMPLE_PREFIX + teacher).public())
    except TeacherNotFound:
        raise HTTPException(status_code=404, detail="teacher not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{teacher}")
def teacher_detail(teacher: str):
    try:
        return load_teacher(teacher).public()
    except TeacherNotFound:
        raise HTTPException(status_code=404, detail="teacher not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
