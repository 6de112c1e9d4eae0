# /app/main.py
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- Core / Config ---
from app.core.config import settings
from app.core.firebase import initialize_firebase
from app.db.base import Base
from app.db.session import engine

# --- API Routers ---
from app.api.routes import auth as auth_router
from app.api.routes import public as public_router
from app.api.routes import staff as staff_router
from app.api.routes import student as student_router
from app.api.routes import superadmin as superadmin_router


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    force=True
)
logger = logging.getLogger(__name__)


# --- Lifespan (애플리케이션 시작/종료 이벤트) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    initialize_firebase()
    yield


app = FastAPI(
    title="Placement Cell Portal API",
    lifespan=lifespan
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logging.info(
        f"Request processed: {request.method} {request.url.path} - Completed in {process_time:.4f} secs"
    )
    return response


# --- 예외 처리: 모든 실패 응답은 {"error": ...} 형식 ---
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors(), exclude={"ctx"})},
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=409, content={"error": "Resource already exists"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# --- CORS 미들웨어 설정 ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- 라우트 등록 ---
app.include_router(public_router.router, tags=["public"])

app.include_router(
    auth_router.router,
    prefix="/auth",
    tags=["Authentication"]
)

app.include_router(
    staff_router.router,
    prefix="/staff",
    tags=["staff"]
)

app.include_router(
    student_router.router,
    prefix="/student",
    tags=["students"]
)

app.include_router(
    superadmin_router.session_router,
    prefix="/superadmin",
    tags=["superadmin"]
)

app.include_router(
    superadmin_router.router,
    prefix="/superadmin",
    tags=["superadmin"]
)
