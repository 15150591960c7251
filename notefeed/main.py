# notefeed/main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from notefeed import models  # registers the tables on Base.metadata
from notefeed.database import init_db
from notefeed.auth.auth_service import get_secret_key
from notefeed.routers import notifications, users
import time
import os
from dotenv import load_dotenv
import logging
import sys
import uvicorn


load_dotenv()

# Logging Configuration
date_format_string = "%d %B %Y %H:%M:%S"
log_formatter = logging.Formatter(
    fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt=date_format_string
)
logger = logging.getLogger()
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

log_stream_handler = logging.StreamHandler(sys.stdout)
log_stream_handler.setFormatter(log_formatter)
logger.addHandler(log_stream_handler)

if os.getenv("LOG_FILE"):
    log_file_handler = logging.FileHandler(os.getenv("LOG_FILE"))
    log_file_handler.setFormatter(log_formatter)
    logger.addHandler(log_file_handler)

logger.info("Application starting up...")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Refuse to serve without a signing key
    get_secret_key()
    try:
        await init_db()
        logger.info("Database tables created successfully.")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}", exc_info=True)
        raise
    yield


app = FastAPI(lifespan=lifespan)


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    client = f"{request.client.host}:{request.client.port}" if request.client else "-"
    logger.info(
        f"Request: {client} - "
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Processing Time: {process_time:.4f}s"
    )
    return response

app.include_router(notifications.router)
app.include_router(users.router)

@app.get("/")
def read_root():
    return {"message": "Nice try :)"}

logger.info("Application setup complete.")

if __name__ == "__main__":
    uvicorn.run("notefeed.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
