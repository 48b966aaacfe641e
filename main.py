import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import models  # noqa: F401  registers tables on Base.metadata
import settings
from db import Base, engine
from routers.admin import router as admin_router
from routers.health import router as health_router
from routers.llm import router as llm_router
from routers.prefs import router as prefs_router
from routers.quizzes import router as quizzes_router
from routers.sessions import router as sessions_router
from routers.teachers import router as teachers_router
from routers.tts import router as tts_router

logger = logging.getLogger("quizzer")
logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.db_auto_create():
        Base.metadata.create_all(bind=engine)
        logger.info("database tables ensured")
    yield


app = FastAPI(title="Quizzer – Teacher Quiz API", lifespan=lifespan)

# Allow calls from the Next.js dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


# Register routers
app.include_router(quizzes_router)  # /api/quiz/..., /api/quizzes/...
app.include_router(teachers_router)  # /api/teachers/...
app.include_router(prefs_router)  # /api/prefs/...
app.include_router(llm_router)  # /api/llm, /api/hints
app.include_router(tts_router)  # /api/tts
app.include_router(sessions_router)  # /api/sessions/...
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...
