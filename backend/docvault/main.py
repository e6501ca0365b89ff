# backend/docvault/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .database import engine
from . import models
from .api import documents
from .config import settings
from .utils.logging import api_logger

# Create all tables on startup
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="DocVault API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(documents.router)

api_logger.info("DocVault API initialised", extra={
    "uploads_path": str(settings.UPLOADS_PATH),
    "cors_origins": settings.CORS_ORIGINS
})

@app.get("/")
async def root():
    return {"message": "DocVault API is running"}
