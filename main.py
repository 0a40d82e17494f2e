from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from config.database import Database
from config.logging_config import setup_logging
from crud.exceptions import MarketplaceError, NotFound
from routes import service_routes, booking_routes
from dotenv import load_dotenv
import uvicorn
import logging
import os

load_dotenv()
setup_logging()
logger = logging.getLogger(__name__)

# First path segments owned by the API; never answered with the front-end
API_PREFIXES = {"api", "services", "my-services", "bookings"}

app = FastAPI(title="Services Marketplace API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(service_routes.router)
app.include_router(service_routes.provider_router)
app.include_router(booking_routes.router)

async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "error": jsonable_encoder(exc.error)},
    )

async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request body", "error": jsonable_encoder(exc.errors())},
    )

async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "error": str(exc)},
    )

def register_error_handlers(app: FastAPI) -> None:
    """Every failure leaves as a {message, error} body."""
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

register_error_handlers(app)

@app.on_event("startup")
async def startup_db_client():
    try:
        await Database.connect_db()
    except Exception as e:
        logger.error(f"Error during startup: {str(e)}")
        raise

@app.on_event("shutdown")
async def shutdown_db_client():
    await Database.close_db()

@app.get("/api", response_class=PlainTextResponse)
def read_root():
    return "Server API is Running!!!"

def mount_frontend(app: FastAPI, static_dir: str) -> bool:
    """Serve a built single-page app from static_dir, falling back to index.html."""
    if not os.path.isdir(static_dir):
        return False
    root = os.path.realpath(static_dir)
    index_file = os.path.join(root, "index.html")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        if full_path.split("/", 1)[0] in API_PREFIXES:
            raise NotFound("Not found", full_path)
        candidate = os.path.realpath(os.path.join(root, full_path))
        if full_path and candidate.startswith(root + os.sep) and os.path.isfile(candidate):
            return FileResponse(candidate)
        if not os.path.isfile(index_file):
            raise NotFound("Not found", full_path)
        return FileResponse(index_file)

    logger.info(f"Serving front-end from {root}")
    return True

mount_frontend(app, os.getenv("STATIC_DIR", "dist"))

if __name__ == "__main__":
    port = int(os.environ.get("PORT", "3000"))
    uvicorn.run(app, host="0.0.0.0", port=port)
