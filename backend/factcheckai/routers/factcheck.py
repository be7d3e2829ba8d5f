# backend/factcheckai/routers/factcheck.py
"""
HTTP surface:
 - POST /factcheck         claim or article URL -> FactCheckResult
 - POST /factcheck/report  claim + result -> plain-text report download
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse

from factcheckai.models.schema import ErrorResponse, FactCheckRequest, FactCheckResult, ReportRequest
from factcheckai.services.orchestrator import FactCheckService
from factcheckai.services.report import REPORT_FILENAME, render_report


def create_router(service: FactCheckService) -> APIRouter:
    router = APIRouter()

    @router.post(
        "/factcheck",
        response_model=FactCheckResult,
        response_model_exclude_none=True,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def factcheck(req: FactCheckRequest):
        outcome = service.handle(req)
        if isinstance(outcome, ErrorResponse):
            return JSONResponse(status_code=outcome.status_code, content=outcome.model_dump())
        return outcome

    @router.post("/factcheck/report", response_class=PlainTextResponse)
    def factcheck_report(req: ReportRequest):
        return PlainTextResponse(
            render_report(req.claim, req.result),
            headers={"Content-Disposition": f"attachment; filename={REPORT_FILENAME}"},
        )

    return router
