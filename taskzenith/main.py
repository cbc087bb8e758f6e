"""FastAPI application serving the TaskZenith REST API."""
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskzenith.api.v1 import api_router
from taskzenith.config import settings
from taskzenith.database import Base, engine
from taskzenith.logging_config import setup_logging

Base.metadata.create_all(bind=engine)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, debug=settings.DEBUG)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)

    @app.get("/api/health", include_in_schema=False)
    def health():
        return {"status": "ok", "version": settings.APP_VERSION}

    return app


app = create_app()


def run() -> None:
    setup_logging(settings.LOG_LEVEL)
    uvicorn.run("taskzenith.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
