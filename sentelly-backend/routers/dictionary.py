"""
Dictionary Router

Word lookup endpoint backed by the word store and Gemini.

Endpoints:
    GET /api/dictionary - Definition for a word, with spelling correction
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from core.dependencies import get_lookup_resolver
from services.dictionary.resolver import LookupResolver
from utils.logging import get_logger
from utils.rate_limit import limit_lookup
from utils.request_context import build_caller_identity

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Dictionary"])


@router.get(
    "/dictionary",
    summary="Look up a word",
    responses={
        400: {"description": "Word parameter is missing"},
        500: {"description": "Definition could not be produced"}
    }
)
@limit_lookup
async def lookup_word(
    request: Request,
    word: Optional[str] = Query(None, description="Word to define"),
    ignore_correction: bool = Query(
        False,
        alias="ignoreCorrection",
        description="Skip the spelling check and define the word as typed"
    ),
    user_id: Optional[str] = Query(None),
    user_email: Optional[str] = Query(None),
    session_id: Optional[str] = Query(None),
    resolver: LookupResolver = Depends(get_lookup_resolver)
):
    """
    Get a structured definition for a word.

    Served from the word store when the (possibly corrected) word has been
    looked up before, otherwise generated by Gemini and stored.

    Returns:
        JSONResponse: Definition payload tagged with its source
    """
    caller = build_caller_identity(request, user_id, user_email, session_id)
    response = await resolver.resolve(word, ignore_correction=ignore_correction, caller=caller)
    return JSONResponse(content=response.to_payload())
