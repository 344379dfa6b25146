# catalog/main.py
import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, configure_logging, load_settings
from .core import CatalogError, ErrorKind, parse_body, validate_product
from .database import ProductStore
from .models import Product, ProductIn, ProductPage
from . import sdk

logger = logging.getLogger(__name__)


# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store


async def validated_body(request: Request) -> Dict[str, Any]:
    # bodies that are not sent as JSON are read as empty
    payload: Any = {}
    if request.headers.get("content-type", "").lower().startswith("application/json"):
        try:
            payload = parse_body(await request.body())
        except ValueError:
            raise CatalogError.invalid_input()
    return validate_product(payload)


def _error_response(exc: CatalogError) -> JSONResponse:
    # middleware-level rejections answer with "message", handler errors with "error"
    if exc.kind in (ErrorKind.UNAUTHORIZED, ErrorKind.INVALID_INPUT):
        return JSONResponse(status_code=exc.kind.value, content={"message": exc.message})
    return JSONResponse(status_code=exc.kind.value, content={"error": exc.message})


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="product-catalog (in-memory)")
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore()

    # ---------------------------
    # Middleware (last registered runs first)
    # ---------------------------
    @app.middleware("http")
    async def require_api_key(request: Request, call_next):
        api_key = request.headers.get("x-api-key")
        if not api_key or not settings.api_key or api_key != settings.api_key:
            return _error_response(CatalogError.unauthorized())
        return await call_next(request)

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        logger.info("[%s] %s %s", stamp, request.method, target)
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------
    # Error translation
    # ---------------------------
    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("internal error on %s %s: %s", request.method, request.url.path, exc.message)
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return _error_response(CatalogError(ErrorKind.INTERNAL, str(exc)))

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/api/products", responses={200: {"model": ProductPage}})
    def list_products(
        category: Optional[str] = None,
        q: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        store: ProductStore = Depends(get_store),
    ):
        return sdk.list_products_logic(store, category=category, q=q, page=page, limit=limit)

    @app.get("/api/products/{product_id}", responses={200: {"model": Product}})
    def get_product(product_id: str, store: ProductStore = Depends(get_store)):
        return sdk.get_product_logic(store, product_id)

    @app.post(
        "/api/products",
        status_code=201,
        responses={201: {"model": Product}},
        openapi_extra={"requestBody": {"content": {"application/json": {"schema": ProductIn.model_json_schema(by_alias=True)}}}},
    )
    def create_product(
        payload: Dict[str, Any] = Depends(validated_body),
        store: ProductStore = Depends(get_store),
    ):
        return sdk.create_product_logic(store, payload)

    @app.put("/api/products/{product_id}", responses={200: {"model": Product}})
    def update_product(
        product_id: str,
        payload: Dict[str, Any] = Depends(validated_body),
        store: ProductStore = Depends(get_store),
    ):
        return sdk.update_product_logic(store, product_id, payload)

    @app.delete("/api/products/{product_id}", responses={200: {"model": Product}})
    def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
        return sdk.delete_product_logic(store, product_id)

    return app


app = create_app()


def run(settings: Optional[Settings] = None):
    import uvicorn

    settings = settings or app.state.settings
    logger.info("Server running on http://localhost:%d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
