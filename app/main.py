"""
FastAPI application entrypoint.
Thin layer that wires up routers, middleware and error handlers.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from shopassist.config.settings import settings
from shopassist.config.logging_config import setup_logging, get_logger
from shopassist.interfaces.api.middleware import setup_middleware
from shopassist.interfaces.api.errors import register_exception_handlers
from shopassist.interfaces.api.dependencies import init_services, shutdown_services
from shopassist.interfaces.api.routers import health, chat, products, support
# Setup logging
setup_logging()
logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
   """Application lifespan manager."""
   logger.info("Initializing services...")
   try:
       init_services()
       logger.info("Services initialized successfully")
   except Exception as e:
       logger.error(f"Service initialization failed: {e}")
       raise
   yield
   logger.info("Shutting down services...")
   shutdown_services()

# Create FastAPI app
app = FastAPI(
   title=settings.api_title,
   description="Intent-routed shopping assistant with product search and customer support",
   version=settings.api_version,
   lifespan=lifespan,
)

# Setup middleware
setup_middleware(app)
register_exception_handlers(app)
# Register routers
app.include_router(health.router)
app.include_router(chat.router)
app.include_router(products.router)
app.include_router(support.router)
logger.info("Application startup complete")
