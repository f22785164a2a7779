from fastapi import APIRouter

from modthreads.api.threads import router as threads_router
from modthreads.api.versions import router as versions_router

router = APIRouter()

router.include_router(threads_router)
router.include_router(versions_router)
