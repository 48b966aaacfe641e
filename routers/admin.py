from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from deps.auth import require_admin
from quizbank import reload_quizzes

logger = logging.getLogger("quizzer.routers.admin")

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/reload")
def reload_content():
    n = reload_quizzes()
    logger.info("dropped %d cached quiz folders", n)
    return {"ok": True, "cleared": n}
