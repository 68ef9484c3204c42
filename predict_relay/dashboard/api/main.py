"""
FastAPI main application for the relay.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from predict_relay import __version__
from predict_relay.dashboard.api.routes import (
    markets_router,
    categories_router,
    orderbook_router,
    orders_router,
    positions_router,
    account_router,
    auth_router,
    system_router,
)
from predict_relay.dashboard.api.dependencies import app_state, get_config
from predict_relay.dashboard.api.errors import RelayHTTPError, relay_http_error_handler
from predict_relay.logging import logger, setup_logging

config = get_config()

# Create FastAPI app
app = FastAPI(
    title="Predict Relay API",
    description="Relay between the trading dashboard and the prediction-market API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_exception_handler(RelayHTTPError, relay_http_error_handler)

# Include routers
app.include_router(markets_router)
app.include_router(categories_router)
app.include_router(orderbook_router)
app.include_router(orders_router)
app.include_router(positions_router)
app.include_router(account_router)
app.include_router(auth_router)
app.include_router(system_router)


# ============ Startup/Shutdown ============

@app.on_event("startup")
async def startup_event():
    """Initialize application state on startup."""
    config = get_config()
    setup_logging(config)
    if app_state.client is None:
        app_state.initialize(config)

    logger.info("Predict relay started", api_base_url=config.api_base_url, port=config.port)
    valid, message = config.validate_upstream()
    if not valid:
        logger.warning(f"Upstream configuration incomplete: {message}")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    stats = app_state.client.get_stats() if app_state.client else {}
    await app_state.shutdown()
    logger.info("Predict relay shutting down", total_requests=stats.get("total_requests", 0))


# ============ Root ============

@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Predict Relay API",
        "version": __version__,
        "docs": "/docs"
    }


# ============ Run Server ============

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.host, port=config.port)
