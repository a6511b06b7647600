from fastapi import FastAPI, Depends, Request, status
import logging
from contextlib import asynccontextmanager
from typing import List

from . import schemas, config
from .ledger import Ledger
from shared.exception_handlers import setup_exception_handlers

# Basic logging setup
logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Ledger Service starting up...")
    logger.info(f"Listening on {config.APP_HOST}:{config.APP_PORT}")
    app.state.ledger = Ledger()
    yield
    logger.info(f"Ledger Service shutting down with {len(app.state.ledger)} transactions...")


app = FastAPI(
    title="Ledger Service",
    description="Append-only log of inventory and pricing actions.",
    version="0.1.0",
    lifespan=lifespan
)
setup_exception_handlers(app)


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


@app.get("/health", tags=["Monitoring"], summary="Health Check")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy"}


@app.post(
    "/transactions",
    response_model=schemas.Confirmation,
    status_code=status.HTTP_201_CREATED,
    tags=["Ledger"],
    summary="Record Transaction"
)
async def record_transaction(request_data: schemas.TransactionCreate, ledger: Ledger = Depends(get_ledger)):
    """Appends a transaction; a reused transaction_id is rejected with 409."""
    message = ledger.record(
        transaction_id=request_data.transaction_id,
        action_type=request_data.action_type,
        details=request_data.details,
        actor=request_data.actor,
    )
    return schemas.Confirmation(message=message)


@app.get(
    "/transactions",
    response_model=List[schemas.Transaction],
    tags=["Ledger"],
    summary="List Transactions"
)
async def list_transactions(ledger: Ledger = Depends(get_ledger)):
    """Returns every transaction in append order."""
    return ledger.list_all()


@app.get(
    "/transactions/{transaction_id}",
    response_model=schemas.Transaction,
    tags=["Ledger"],
    summary="Get Transaction"
)
async def read_transaction(transaction_id: str, ledger: Ledger = Depends(get_ledger)):
    return ledger.get(transaction_id)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ledger_service.main:app", host=config.APP_HOST, port=config.APP_PORT)
