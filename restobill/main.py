import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from restobill.api.bills import router as bills_router
from restobill.api.credit import router as credit_router
from restobill.api.expenses import router as expenses_router
from restobill.api.items import router as items_router
from restobill.api.records import router as records_router
from restobill.config import settings
from restobill.db.engine import get_engine
from restobill.db.seed import init_db
from restobill.errors import ReferenceNotFoundError, StorageError, ValidationError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = get_engine()
    init_db(engine, seed=settings.SEED_SAMPLE_ITEMS)
    logger.info("Database ready at %s", engine.url)
    yield
    engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(ReferenceNotFoundError)
async def reference_error_handler(request: Request, exc: ReferenceNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    status_code = 409 if exc.constraint_violation else 500
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(items_router)
app.include_router(bills_router)
app.include_router(expenses_router)
app.include_router(records_router)
app.include_router(credit_router)
