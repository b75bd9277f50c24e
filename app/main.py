import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.gateway import InMemoryCatalog
from app.core.search_service import SearchService
from app.api.routes import search
from app.api.errors import search_error_handler
from app.core.exceptions import SearchError
from ingestion.ingest import load_catalog

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "search_service", None) is None:
        catalog = InMemoryCatalog(load_catalog(settings.catalog_path))
        app.state.search_service = SearchService(catalog=catalog, categories=catalog)
        logger.info("Catalog ready with %d products", catalog.total_products)
    yield


app = FastAPI(
    title="Storefront Product Search",
    lifespan=lifespan,
)

app.include_router(search.router, prefix="/search", tags=["search"])
app.add_exception_handler(SearchError, search_error_handler)
