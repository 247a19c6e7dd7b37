from fastapi import APIRouter

from .routes_debug import router as _debug
from .routes_plan import router as _plan
from .routes_still import router as _still
from .routes_tts import router as _tts

router = APIRouter()
router.include_router(_plan, tags=["plan"])
router.include_router(_still, tags=["still"])
router.include_router(_tts, tags=["tts"])
router.include_router(_debug, tags=["debug"])
