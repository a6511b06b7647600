from fastapi import FastAPI, Depends, Header, Request, status
import logging
from contextlib import asynccontextmanager
from typing import List

from . import schemas, config
from .registry import ProfileRegistry
from shared.exception_handlers import setup_exception_handlers

# Basic logging setup
logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Business Profile Service starting up...")
    logger.info(f"Listening on {config.APP_HOST}:{config.APP_PORT}")
    app.state.registry = ProfileRegistry()
    yield
    logger.info("Business Profile Service shutting down...")


app = FastAPI(
    title="Business Profile Service",
    description="Registers and maintains business profiles, one per owner identity.",
    version="0.1.0",
    lifespan=lifespan
)
setup_exception_handlers(app)


def get_registry(request: Request) -> ProfileRegistry:
    return request.app.state.registry


async def get_caller(x_caller_id: str = Header(..., alias=config.CALLER_HEADER)) -> str:
    return x_caller_id


@app.get("/health", tags=["Monitoring"], summary="Health Check")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy"}


@app.post(
    "/profiles",
    response_model=schemas.BusinessProfile,
    status_code=status.HTTP_201_CREATED,
    tags=["Profiles"],
    summary="Create Business Profile"
)
async def create_profile(
    profile: schemas.BusinessProfileInput,
    caller: str = Depends(get_caller),
    registry: ProfileRegistry = Depends(get_registry)
):
    """Creates the caller's profile. The profile owner must be the caller."""
    return registry.create(caller, profile)


@app.put(
    "/profiles",
    response_model=schemas.BusinessProfile,
    tags=["Profiles"],
    summary="Update Business Profile"
)
async def update_profile(
    profile: schemas.BusinessProfileInput,
    caller: str = Depends(get_caller),
    registry: ProfileRegistry = Depends(get_registry)
):
    return registry.update(caller, profile)


@app.post(
    "/profiles/steps/{step_id}",
    response_model=List[int],
    tags=["Onboarding"],
    summary="Save Completed Step"
)
async def save_completed_step(
    step_id: int,
    caller: str = Depends(get_caller),
    registry: ProfileRegistry = Depends(get_registry)
):
    return registry.save_completed_step(caller, step_id)


@app.get(
    "/profiles/{owner}",
    response_model=schemas.BusinessProfile,
    tags=["Profiles"],
    summary="Get Business Profile"
)
async def read_profile(owner: str, registry: ProfileRegistry = Depends(get_registry)):
    return registry.get(owner)


@app.get(
    "/profiles/{owner}/steps",
    response_model=List[int],
    tags=["Onboarding"],
    summary="Get Completed Steps"
)
async def read_completed_steps(owner: str, registry: ProfileRegistry = Depends(get_registry)):
    return registry.get_completed_steps(owner)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("business_profile_service.main:app", host=config.APP_HOST, port=config.APP_PORT)
