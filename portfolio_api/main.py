import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import inspect
from portfolio_api.api.blog import router as blog_router
from portfolio_api.config_manager import get_api_config
from portfolio_api.database.connection import get_engine
from portfolio_api.models import Base

config = get_api_config()

logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(
    title=config.title,
    description=config.description,
    version=config.version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Database initialization is deferred to /init endpoint to avoid startup failures

app.include_router(blog_router, prefix="/api/blog", tags=["blog"])


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.post("/init")
def init_database():
    """Initialize database tables. Call this endpoint after deployment."""
    try:
        engine = get_engine()
        existing_tables = inspect(engine).get_table_names()
        if 'posts' not in existing_tables:
            logger.info("Creating database tables...")
            Base.metadata.create_all(bind=engine)
            return {"status": "success", "message": "Database tables created"}
        return {"status": "success", "message": "Database tables already exist"}
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        return {"status": "error", "message": str(e)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
