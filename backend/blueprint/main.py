# backend/blueprint/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .database import engine
from . import models
from .api import projects, documents, versions
from .config import settings
from .utils.logging import api_logger

# Create all tables on startup
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="Blueprint API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(projects.router)
app.include_router(documents.router)
app.include_router(versions.router)

api_logger.info("Blueprint API initialised", extra={"routers": ["projects", "documents", "versions"]})

@app.get("/")
async def root():
    return {"message": "Blueprint API is running"}

@app.get("/up")
async def health():
    """Liveness probe for load balancers"""
    return {"status": "ok"}
