import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from leasekeeper.config import get_settings
from leasekeeper.database.init import Base, engine
from leasekeeper.database import models  # noqa: F401  registers tables on Base
from leasekeeper.routes import (
    auth_routes,
    admin_routes,
    property_routes,
    tenant_routes,
    notification_routes,
)

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(logging.DEBUG if debug else logging.INFO)
        return
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("LeaseKeeper API started")
    yield


settings = get_settings()
configure_logging(settings.debug)

app = FastAPI(title="LeaseKeeper API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_routes.router)
app.include_router(admin_routes.router)
app.include_router(property_routes.router)
app.include_router(tenant_routes.router)
app.include_router(notification_routes.router)


@app.get("/")
def read_root():
    return {"name": "LeaseKeeper API", "version": "1.0.0"}


if __name__ == "__main__":
    uvicorn.run("leasekeeper.main:app", host=settings.app_host, port=settings.app_port, reload=settings.debug)
