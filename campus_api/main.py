from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager
from urllib.parse import urlparse

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from campus_api.common.errors import (
    CampusDomainError,
    ValidationError,
    domain_error_to_http,
    error_body,
)
from campus_api.config import get_settings
from campus_api.db.core import dispose_engine, init_engine

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}_{route.name}" if route.tags else route.name


# ============================
# Lifespan: pool init / drain
# ============================
@asynccontextmanager
async def lifespan(app: FastAPI):
    init_engine(settings)
    logger.info("[BOOT] Campus Reservations API ready")
    yield
    dispose_engine()


app = FastAPI(
    title="Campus Reservations API",
    description="Cafeteria meal and sports facility reservations for students",
    version="2.0.0",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)


# ============================
#  CORS
# ============================
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
origins.extend(settings.cors_origin_list)

clean_origins = []
for url in origins:
    parsed = urlparse(url)
    if parsed.scheme and parsed.netloc:
        clean_origins.append(f"{parsed.scheme}://{parsed.netloc}")
    else:
        clean_origins.append(url)

origins = list(sorted(set(clean_origins)))

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================
# Request validation -> 400
# ============================
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    field = ".".join(loc) or None
    message = first.get("msg", "Missing or invalid required fields.")
    if field:
        message = f"{field}: {message}"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": error_body(ValidationError.code, message, field=field)},
    )


# ============================
# Domain errors raised outside a route body (dependencies)
# ============================
@app.exception_handler(CampusDomainError)
async def domain_error_handler(request: Request, exc: CampusDomainError):
    http = domain_error_to_http(exc)
    return JSONResponse(status_code=http.status_code, content={"detail": http.detail})


# ============================
# Routers
# ============================
from campus_api.auth_student.login_api import router as login_router
from campus_api.balances.balance_api import router as balance_router
from campus_api.cafeteria.api.cafeteria_reservations_api import (
    router as cafeteria_reservations_router,
)
from campus_api.cafeteria.api.meal_types_api import router as meal_types_router
from campus_api.sports.api.sports_facilities_api import router as sports_facilities_router
from campus_api.sports.api.sports_reservations_api import (
    router as sports_reservations_router,
)

app.include_router(login_router, prefix="/api")
app.include_router(balance_router, prefix="/api")
app.include_router(meal_types_router, prefix="/api")
app.include_router(cafeteria_reservations_router, prefix="/api")
app.include_router(sports_facilities_router, prefix="/api")
app.include_router(sports_reservations_router, prefix="/api")


@app.get("/")
def root():
    return {"message": "Campus Reservations API is running", "docs": "/docs"}


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
