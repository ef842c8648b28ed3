"""Chat API routes: the RAG pipeline entry point and its debug view."""

import logging

from fastapi import APIRouter, Depends

from ..rag.agent import RagComponents, debug_query, get_rag_components, process_query
from ..rag.models import DebugResult, RagResult
from ..schemas.messages import ChatRequest, DebugRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=RagResult)
async def chat(
    payload: ChatRequest,
    components: RagComponents = Depends(get_rag_components),
):
    """Answer one user message.

    Generation failures still return 200 with status="error" so the client
    always has a message to show.
    """
    return await process_query(payload.message, payload.history, components)


@router.post("/debug", response_model=DebugResult)
async def chat_debug(
    payload: DebugRequest,
    components: RagComponents = Depends(get_rag_components),
):
    """Retrieval, priority and quick actions for a message, without generation."""
    return debug_query(payload.message, components)
