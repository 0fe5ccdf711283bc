import logging

from fastapi import FastAPI
from pkgcompat.api.compatibility import router as compatibility_router
from pkgcompat.core.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(
    title="Package Compatibility Checker",
    version="1.0.0",
)

app.include_router(compatibility_router, prefix="/api", tags=["Compatibility"])


@app.get("/")
def root():
    return {"message": "Package Compatibility Checker is running"}
