from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from Endpoints import videos
from db.database import engine, check_connection
from models.other_models import Base
from utils.api_utils import register_exception_handlers
import logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Video Hosting API",
    description="Video resource endpoints: publish, browse, update and delete videos",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Verify the database and create tables on startup
@app.on_event("startup")
async def startup_event():
    logger.info("Testing database connection...")
    if not check_connection():
        logger.warning("App will start but database functionality will be limited")
        return

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables verified/created")

# Include routers
app.include_router(videos.router)

@app.get("/")
def root():
    return {
        "message": "Welcome to the Video Hosting API",
        "version": "1.0.0",
        "features": [
            "Video Listing & Search",
            "Video Publishing",
            "Video Details with Comments & Likes",
            "Thumbnail Replacement",
            "Publish Toggle"
        ]
    }

@app.get("/health")
def health_check():
    """Health check endpoint with database status"""
    if check_connection():
        return {
            "status": "healthy",
            "database": "connected",
            "message": "Video Hosting API is running successfully"
        }

    return {
        "status": "degraded",
        "database": "disconnected",
        "message": "API is running but database is unavailable"
    }
