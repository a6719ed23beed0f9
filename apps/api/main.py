# FastAPI entrypoint for the document service

import os
from typing import Optional

import dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from documents.config import DocumentConfig, build_object_store
from documents.doc_routes import router as document_router
from documents.gateway import DocumentGateway
from documents.validation import ValidationPolicy
from storage.object_store.interfaces import ObjectStore

dotenv.load_dotenv()

FRONTEND_DOMAINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]


def create_app(
    config: Optional[DocumentConfig] = None,
    store: Optional[ObjectStore] = None,
    policy: Optional[ValidationPolicy] = None
) -> FastAPI:
    """
    Build the application.

    The validation policy and object store are created once here and shared
    by every request through a single DocumentGateway. Pass `store` / `policy`
    to run against alternates (tests, local development).
    """
    if config is None and (store is None or policy is None):
        config = DocumentConfig()

    if store is None:
        store = build_object_store(config)
    if policy is None:
        policy = config.to_policy()

    app = FastAPI(
        title="Document Storage API",
        description="Upload, download, list and delete documents in object storage",
        version="1.0.0"
    )
    app.state.document_store = store
    app.state.document_gateway = DocumentGateway(store=store, policy=policy)

    # ==================== CORS MIDDLEWARE ====================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=FRONTEND_DOMAINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept", "Origin"],
        expose_headers=["Content-Disposition", "Content-Type", "Content-Length"],
        max_age=86400,
    )

    # ==================== SECURITY HEADERS MIDDLEWARE ====================

    @app.middleware("http")
    async def set_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    # ==================== ROUTER REGISTRATION ====================

    app.include_router(document_router)     # /document

    @app.get("/")
    async def root():
        """Root endpoint - returns simple welcome message."""
        return {
            "message": "Document Storage API",
            "status": "running",
            "docs_url": "/docs"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "store": type(app.state.document_store).__name__
        }

    # ==================== STARTUP EVENTS ====================

    @app.on_event("startup")
    async def startup_event():
        """Create the document container if it does not exist yet."""
        logger.info("Initializing document store...")
        app.state.document_store.ensure_container()
        logger.info("✓ Document store initialized")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
