import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from factcheckai.config import Config
from factcheckai.routers.factcheck import create_router
from factcheckai.services.gateway import ProviderGateway
from factcheckai.services.orchestrator import FactCheckService
from factcheckai.services.providers import default_providers
from factcheckai.services.scraper import Scraper

logger = logging.getLogger("factcheckai")


def build_service(config: Config) -> FactCheckService:
    return FactCheckService(
        scraper=Scraper(timeout=config.FETCH_TIMEOUT),
        gateway=ProviderGateway(default_providers(config)),
    )


def create_app(config: Optional[Config] = None, service: Optional[FactCheckService] = None) -> FastAPI:
    config = config or Config.from_env()
    service = service or build_service(config)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    app = FastAPI(title="FactCheckAI API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.warning("Rejected malformed request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.get("/")
    def root():
        return {"status": "ok", "message": "Backend running"}

    app.include_router(create_router(service))
    return app


app = create_app()
