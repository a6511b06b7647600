from fastapi import FastAPI, Depends, Request
import logging
from contextlib import asynccontextmanager
from typing import List

# Use relative imports
from . import schemas, config
from .clients import InventoryClient, LedgerClient
from .logic import PricingEngine, RuleBook
from shared.exception_handlers import setup_exception_handlers

# Basic logging setup
logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')
logger = logging.getLogger(__name__)


def build_engine() -> PricingEngine:
    return PricingEngine(
        inventory=InventoryClient(config.INVENTORY_SERVICE_URL, timeout=config.HTTP_TIMEOUT_SECONDS),
        ledger=LedgerClient(config.LEDGER_SERVICE_URL, timeout=config.HTTP_TIMEOUT_SECONDS),
        rules=RuleBook.default(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Pricing Service starting up...")
    logger.info(f"Listening on {config.APP_HOST}:{config.APP_PORT}")
    logger.info(f"Inventory at {config.INVENTORY_SERVICE_URL}, ledger at {config.LEDGER_SERVICE_URL}")
    app.state.engine = build_engine()
    yield
    logger.info("Pricing Service shutting down...")


app = FastAPI(
    title="Pricing Service",
    description="Adjusts item prices with named rules and logs each adjustment.",
    version="0.1.0",
    lifespan=lifespan
)
setup_exception_handlers(app)


def get_engine(request: Request) -> PricingEngine:
    return request.app.state.engine


@app.get("/health", tags=["Monitoring"], summary="Health Check")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy"}


@app.post(
    "/prices/{item_id}/adjust",
    response_model=schemas.PriceAdjustmentResult,
    tags=["Pricing"],
    summary="Adjust Item Price"
)
async def adjust_price_endpoint(item_id: str, engine: PricingEngine = Depends(get_engine)):
    """
    Fetches the item from the Inventory Service, applies the active rules
    and records the adjustment with the Ledger Service. If either call fails
    the whole adjustment fails.
    """
    logger.info(f"Received price adjustment request for item: {item_id}")
    return await engine.adjust_price(item_id)


@app.get(
    "/rules",
    response_model=List[schemas.PricingRule],
    tags=["Rules"],
    summary="List Pricing Rules"
)
async def list_rules(engine: PricingEngine = Depends(get_engine)):
    return engine.rules.all_rules()


@app.put(
    "/rules/{name}",
    response_model=schemas.PricingRule,
    tags=["Rules"],
    summary="Update Pricing Rule"
)
async def update_rule(name: str, update: schemas.PricingRuleUpdate, engine: PricingEngine = Depends(get_engine)):
    return engine.rules.set_rule(name, update.description, update.active)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("pricing_service.main:app", host=config.APP_HOST, port=config.APP_PORT)
