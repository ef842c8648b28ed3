"""Read-only knowledge base API routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..rag.core import KnowledgeStore, Retriever, get_knowledge_store
from ..rag.models import KnowledgeItem

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


@router.get("", response_model=List[KnowledgeItem])
async def list_knowledge(
    category: Optional[str] = None,
    priority: Optional[int] = Query(default=None, ge=1),
    store: KnowledgeStore = Depends(get_knowledge_store),
):
    """All knowledge items, optionally filtered by category and priority."""
    if category is not None:
        items = store.items_by_category(category)
    else:
        items = list(store.all_items())
    if priority is not None:
        by_priority = store.items_by_priority(priority)
        items = [i for i in items if i in by_priority]
    return items


@router.get("/categories", response_model=dict[str, str])
async def get_categories(store: KnowledgeStore = Depends(get_knowledge_store)):
    """Category code -> display name."""
    return store.categories()


@router.get("/sources", response_model=List[str])
async def get_sources(store: KnowledgeStore = Depends(get_knowledge_store)):
    """Citation sources for the dataset."""
    return store.sources()


@router.get("/search", response_model=List[KnowledgeItem])
async def search_knowledge(
    q: str = Query(..., min_length=1),
    limit: int = Query(default=3, ge=1, le=50),
    store: KnowledgeStore = Depends(get_knowledge_store),
):
    """Ranked keyword search."""
    return Retriever(store).retrieve(q, limit)


@router.get("/{item_id}", response_model=KnowledgeItem)
async def get_knowledge_item(item_id: str, store: KnowledgeStore = Depends(get_knowledge_store)):
    """Get a single knowledge item by ID."""
    item = store.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Knowledge item not found")
    return item
