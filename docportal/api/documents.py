"""Document browser endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from docportal.api.auth import get_current_user
from docportal.api.stats import get_store
from docportal.core.stats import get_document_filter_options
from docportal.core.store import StatsStore
from docportal.schemas import DocumentFilterOptions

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/filter-options", response_model=DocumentFilterOptions)
def filter_options(
    current_user = Depends(get_current_user),
    store: StatsStore = Depends(get_store),
):
    """Get distinct categories, file types and tags of root documents."""
    try:
        store.apply_timeout()
        return get_document_filter_options(store)
    except SQLAlchemyError as e:
        logger.exception(f"Error fetching filter options: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
