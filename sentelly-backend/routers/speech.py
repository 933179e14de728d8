"""
Speech Router

Pronunciation audio endpoint.

Endpoints:
    GET /api/tts - MP3 pronunciation for a word
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from config.constants import AUDIO_CACHE_CONTROL
from core.dependencies import get_audio_resolver
from services.voice.audio_resolver import AudioResolver
from utils.logging import get_logger
from utils.rate_limit import limit_speech
from utils.request_context import build_caller_identity

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Speech & Audio"])


@router.get(
    "/tts",
    summary="Get pronunciation audio",
    responses={
        200: {
            "description": "Audio file (MP3)",
            "content": {"audio/mpeg": {}}
        },
        400: {"description": "Text parameter is missing"},
        500: {"description": "Speech generation failed"}
    }
)
@limit_speech
async def get_pronunciation(
    request: Request,
    text: Optional[str] = Query(None, description="Word or phrase to pronounce"),
    user_id: Optional[str] = Query(None),
    user_email: Optional[str] = Query(None),
    session_id: Optional[str] = Query(None),
    resolver: AudioResolver = Depends(get_audio_resolver)
):
    """
    Get text-to-speech audio for a word.

    Checks the in-process cache and stored pronunciations first.
    If neither has it, generates audio using ElevenLabs.

    Returns:
        Response: Audio file as audio/mpeg, X-Cache HIT or MISS
    """
    caller = build_caller_identity(request, user_id, user_email, session_id)
    result = await resolver.resolve(text, caller=caller)

    return Response(
        content=result.audio,
        media_type="audio/mpeg",
        headers={
            "Cache-Control": AUDIO_CACHE_CONTROL,
            "X-Cache": "HIT" if result.cache_hit else "MISS",
        }
    )
