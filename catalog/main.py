from fastapi import FastAPI
import logging
from contextlib import asynccontextmanager

from catalog.config import settings
from catalog.database import db
from catalog.api.routes import products as product_routes
from catalog.middleware.cors_config import configure_cors


logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context: apply the configured log level and report where
    products are stored before the app starts serving.
    """
    logging.getLogger("catalog").setLevel(settings.LOG_LEVEL.upper())

    products_path = db.path_for("products")
    if not products_path.exists():
        logger.info("Products file not found at %s; it will be created on first save.", products_path)
    else:
        logger.info("Found products file: %s", products_path)

    yield
    logger.info("Shutting down Product Catalog API")


app = FastAPI(title="Product Catalog API", version="0.1.0", lifespan=lifespan)
configure_cors(app)

app.include_router(product_routes.router)


@app.get("/", tags=["root"])
async def root():
    return {"status": "ok", "service": "Product Catalog API", "env": settings.ENV}
