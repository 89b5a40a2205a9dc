"""Agency Site - FastAPI server for the bilingual agency website and its JSON API."""

import os
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from agency_site.shared.database import init_db
from agency_site.shared.errors import InvalidInput, LocaleNotFound, ValidationFailed
from agency_site.shared.security.input_validation import sanitize_error_message
from agency_site.shared.admin.routes import router as admin_router
from agency_site.shared.contact.routes import router as contact_router
from agency_site.shared.content.routes import router as content_router
from agency_site.shared.pages.routes import router as pages_router

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

app = FastAPI(
    title="Agency Site",
    description="Bilingual (Indonesian/English) agency website: content API and contact form",
    version="0.1.0"
)


# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    try:
        init_db()
        logging.info("Database initialization completed on startup")
    except Exception as e:
        # Log error but don't crash the app
        logging.error(f"Database initialization error on startup: {str(e)}")


# CORS configuration - must be added before exception handlers
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _cors_headers(request: Request) -> dict:
    """CORS headers for error responses produced outside the middleware."""
    origin = request.headers.get("origin")
    if origin not in CORS_ORIGINS:
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "*",
        "Access-Control-Allow-Headers": "*",
    }


def _detail_content(detail) -> dict:
    # Handle both string and dict detail formats
    if isinstance(detail, dict):
        return detail
    if isinstance(detail, str):
        return {"detail": detail}
    return {"detail": str(detail)}


# Global exception handlers to ensure CORS headers are always added
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content=_detail_content(exc.detail),
                        headers={**(exc.headers or {}), **_cors_headers(request)})


@app.exception_handler(StarletteHTTPException)
async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=_detail_content(exc.detail),
                        headers=_cors_headers(request))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.errors()}, headers=_cors_headers(request))


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    """Malformed identifiers and query parameters never reach a query."""
    return JSONResponse(status_code=400, content={"success": False, "error": str(exc)},
                        headers=_cors_headers(request))


@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(status_code=400,
                        content={"success": False, "error": "Validation failed", "details": exc.details},
                        headers=_cors_headers(request))


@app.exception_handler(LocaleNotFound)
async def locale_not_found_handler(request: Request, exc: LocaleNotFound):
    """Unknown locale segments are a hard 404, not a silent fallback."""
    return JSONResponse(status_code=404, content={"success": False, "error": "Not found"},
                        headers=_cors_headers(request))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logging.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    message = sanitize_error_message(exc, "Internal server error")
    return JSONResponse(status_code=500, content={"success": False, "error": message},
                        headers=_cors_headers(request))


@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.get("/robots.txt")
async def robots_txt():
    """Keep crawlers out of the JSON API."""
    return Response(content="User-agent: *\nDisallow: /api/\n", media_type="text/plain")


app.include_router(contact_router)
app.include_router(content_router)
app.include_router(admin_router)
# Locale catch-all routes go last
app.include_router(pages_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))
