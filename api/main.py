"""
FastAPI backend for the Sales Operations Dashboard.
Provides REST API endpoints for spreadsheet exports and collections management.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Dict, Literal

from fastapi import FastAPI, HTTPException, Depends, Header, Query
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import app_config, store_config
from models import User, CollectionStats
from export import ADAPTERS, ExportFormat, ExportError, EmptyExportError, export_entities
from store import DataStore, InMemoryStore, RestStore, StoreError, fetch_entities
from reconciliation import (
    CollectionsService,
    CompletionCache,
    CompletionCacheError,
    AccessDeniedError,
    CollectionNotFoundError,
    RecognitionError,
    AlreadyRecognizedError,
    format_currency,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, app_config.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Sales Operations Dashboard API",
    description="API for exporting dashboard data and managing credit and cheque collections",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Ensure directories exist
app_config.ensure_directories()


def build_store() -> DataStore:
    """Use the hosted database when configured, otherwise an empty in-memory store."""
    if store_config.url:
        return RestStore()
    logger.warning("No database URL configured, using in-memory store")
    return InMemoryStore()


_store = build_store()
_service = CollectionsService(_store, CompletionCache())


def get_store() -> DataStore:
    return _store


def get_service() -> CollectionsService:
    return _service


# Request/Response models
class RecognizeRequest(BaseModel):
    notes: Optional[str] = None


class CollectionsResponse(BaseModel):
    records: List[Dict]
    stats: CollectionStats


StatusFilter = Literal["all", "pending", "complete"]
TypeFilter = Literal["all", "credit", "cheque"]


def current_user(
    x_user_email: Optional[str] = Header(default=None),
    store: DataStore = Depends(get_store),
) -> User:
    """Resolve the authenticated user passed by the auth gateway."""
    if not x_user_email:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        users = fetch_entities(store, "users")
    except StoreError as e:
        raise HTTPException(status_code=502, detail=str(e))

    for user in users:
        if user.email == x_user_email:
            return user
    raise HTTPException(status_code=401, detail="Unknown user")


@contextmanager
def _loading_collections():
    """Translate worklist loading failures into HTTP errors."""
    try:
        yield
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StoreError as e:
        logger.error(f"Failed to load collections: {e}")
        raise HTTPException(status_code=502, detail="Failed to load data")
    except CompletionCacheError as e:
        raise HTTPException(status_code=500, detail=str(e))


def _refresh(service: CollectionsService, user: User):
    with _loading_collections():
        service.refresh(user)


def _worklist(service: CollectionsService, user: User, status: str, collection_type: str):
    with _loading_collections():
        return service.worklist(user, status, collection_type)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "Sales Operations Dashboard",
        "version": "1.0.0"
    }


@app.get("/export/{entity}")
def export_entity(
    entity: str,
    format: ExportFormat = ExportFormat.XLSX,
    store: DataStore = Depends(get_store),
) -> Response:
    """
    Export one entity table as CSV or Excel.

    Args:
        entity: orders, products, customers, driver_allocations,
            driver_sales, users or suppliers
        format: csv or xlsx

    Returns:
        File download
    """
    if entity not in ADAPTERS:
        raise HTTPException(status_code=404, detail=f"Unknown entity: {entity}")

    try:
        items = fetch_entities(store, entity)
        artifact = export_entities(entity, items, format)
    except EmptyExportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExportError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except StoreError as e:
        logger.error(f"Failed to load {entity}: {e}")
        raise HTTPException(status_code=502, detail="Failed to load data")

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


@app.get("/collections")
def list_collections(
    status: StatusFilter = "all",
    collection_type: TypeFilter = Query(default="all", alias="type"),
    user: User = Depends(current_user),
    service: CollectionsService = Depends(get_service),
) -> CollectionsResponse:
    """List collections with stats for the filtered view."""
    records, stats = _worklist(service, user, status, collection_type)
    return CollectionsResponse(
        records=[r.model_dump(mode="json") for r in records],
        stats=stats,
    )


@app.get("/collections/stats")
def collection_stats(
    status: StatusFilter = "all",
    collection_type: TypeFilter = Query(default="all", alias="type"),
    user: User = Depends(current_user),
    service: CollectionsService = Depends(get_service),
) -> CollectionStats:
    """Aggregate amounts for the filtered view."""
    _, stats = _worklist(service, user, status, collection_type)
    return stats


@app.post("/collections/{collection_id}/recognize")
def recognize_collection(
    collection_id: str,
    request: Optional[RecognizeRequest] = None,
    user: User = Depends(current_user),
    service: CollectionsService = Depends(get_service),
) -> Dict:
    """Recognize a pending collection as collected."""
    notes = request.notes if request and request.notes else ""

    # The worklist refreshed for this caller is the one recognized against
    with service.lock:
        _refresh(service, user)
        try:
            record = service.recognize(collection_id, user, notes)
        except CollectionNotFoundError:
            raise HTTPException(status_code=404, detail="Collection not found")
        except AlreadyRecognizedError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except RecognitionError as e:
            raise HTTPException(status_code=502, detail=str(e))

    return {
        "status": record.status.value,
        "record": record.model_dump(mode="json"),
        "message": (
            f"{record.collection_type.value.upper()} collection of {format_currency(record.amount)} "
            f"has been completed and all outstanding amounts updated!"
        ),
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "store": type(_store).__name__,
        "output_dir": str(app_config.output_dir),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=app_config.api_host,
        port=app_config.api_port,
        reload=True
    )
