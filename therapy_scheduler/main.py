# therapy_scheduler/main.py
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from therapy_scheduler.routers import calendar, chat, oauth
from therapy_scheduler.core.config import get_settings
from therapy_scheduler.core.logger import logger
from therapy_scheduler.db.mongo import client, verify_mongodb_connection
from therapy_scheduler.services.calendar import CalendarBooker
from therapy_scheduler.utils.responses import format_error_response


app = FastAPI(
    title="Therapy Scheduler",
    version="0.1.0",
    description="Chat backend that matches patients with therapists and books their first session",
)

# ✅ CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


# ✅ Startup/shutdown
@app.on_event("startup")
async def startup():
    logger.info("Therapy Scheduler starting")
    CalendarBooker(get_settings()).log_configuration()
    await verify_mongodb_connection()

@app.on_event("shutdown")
async def shutdown_db():
    client.close()

# ✅ Health check
@app.get("/", tags=["root"], summary="Health check")
async def root():
    return {"status": "ok", "service": "Therapy Scheduler"}

# ✅ Error handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error_response(exc, status_code=exc.status_code),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=format_error_response(exc, status_code=422),
    )

@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=format_error_response(exc),
    )

# ✅ Routes
app.include_router(chat.router,     prefix="/chat")
app.include_router(calendar.router, prefix="/calendar")
app.include_router(oauth.router,    prefix="/oauth")
