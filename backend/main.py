# backend/main.py
import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from dotenv import load_dotenv

from config import settings
from database import init_db
from utils.navigation import ViewRedirect, ViewPending
from utils.storage import upload_root, PUBLIC_PREFIX

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Router imports
from routes.auth import router as auth_router
from routes.products import router as products_router
from routes.quote_requests import router as quote_requests_router
from routes.simulations import router as simulations_router
from routes.exporter import router as exporter_router
from routes.dashboard import router as dashboard_router

# Initialisation
init_db()

app = FastAPI(title=settings.PROJECT_NAME, version="1.0.0")

# Uploads - make sure the folder exists before mounting it
upload_root().mkdir(parents=True, exist_ok=True)
app.mount(PUBLIC_PREFIX, StaticFiles(directory=str(upload_root())), name="uploads")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Role gate outcomes: wrong role or no session -> redirect, unresolved session -> wait
@app.exception_handler(ViewRedirect)
def view_redirect_handler(request: Request, exc: ViewRedirect):
    return RedirectResponse(exc.location, status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(ViewPending)
def view_pending_handler(request: Request, exc: ViewPending):
    return JSONResponse({"view": "loading"}, status_code=status.HTTP_202_ACCEPTED)


# Router registration
app.include_router(auth_router)
app.include_router(dashboard_router)
app.include_router(products_router)
app.include_router(quote_requests_router)
app.include_router(simulations_router)
app.include_router(exporter_router)


@app.get("/health")
def health_check():
    return {"status": "healthy"}
