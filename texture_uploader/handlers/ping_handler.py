from __future__ import annotations

import logging

from fastapi import APIRouter

from texture_uploader.models import SuccessResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/ping")
async def ping():
    logger.info("ping() called")
    return SuccessResponse(message="pong").model_dump()
