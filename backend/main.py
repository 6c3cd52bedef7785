"""SEO audit API – FastAPI app and endpoints."""

import logging

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

import config
from auditor import audit_url
from database import (
    ProjectNotFoundError,
    get_project,
    get_seo_audit,
    init_db,
    insert_project,
    list_projects,
    save_seo_audit,
)
from models import AuditResult
from presentation import build_report
from schemas import (
    AuditReportResponse,
    AuditRequest,
    CreateProjectRequest,
    ProjectHistoryItem,
    ProjectResponse,
)
from scraper import FetchError, InvalidUrlError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SEO Audit API",
    description="On-page SEO audit and scoring",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup() -> None:
    config.configure_logging()
    init_db()


def _run_audit(url: str) -> AuditResult:
    """Fetch + analyze, translating collaborator failures into HTTP errors."""
    if not url:
        raise HTTPException(status_code=400, detail="URL is required")
    try:
        return audit_url(url)
    except InvalidUrlError:
        raise HTTPException(status_code=400, detail="Invalid URL")
    except FetchError as exc:
        status = 422 if exc.status_code is not None else 502
        raise HTTPException(status_code=status, detail=f"Failed to fetch URL: {exc}")
    except Exception as exc:
        logger.exception("Audit of %s failed", url)
        raise HTTPException(status_code=500, detail=f"Failed to analyze URL: {exc}")


@app.post("/projects", response_model=ProjectResponse, status_code=201)
def create_project(body: CreateProjectRequest) -> ProjectResponse:
    project_id = insert_project(name=body.name, website_url=body.website_url)
    return ProjectResponse(**get_project(project_id))


@app.get("/projects", response_model=list[ProjectHistoryItem])
def get_projects(limit: int = 20) -> list[ProjectHistoryItem]:
    """Return recent projects with their last overall score."""
    return [ProjectHistoryItem(**row) for row in list_projects(limit=limit)]


@app.get("/project/{project_id}", response_model=ProjectResponse)
def get_project_detail(project_id: int) -> ProjectResponse:
    row = get_project(project_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return ProjectResponse(**row)


@app.post("/project/{project_id}/seo-audit", response_model=AuditResult)
def audit_project(project_id: int, body: AuditRequest, response: Response) -> AuditResult:
    """
    Pipeline: check project -> fetch page -> extract + score -> store -> return result.
    A storage failure does not fail the request; the audit itself succeeded.
    """
    row = get_project(project_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Project not found")

    result = _run_audit(body.url or (row["website_url"] or ""))

    try:
        save_seo_audit(project_id, result.to_json_dict())
        response.headers["X-Audit-Stored"] = "true"
    except Exception:
        logger.exception("Could not store SEO audit for project %s", project_id)
        response.headers["X-Audit-Stored"] = "false"

    return result


@app.get("/project/{project_id}/seo-audit", response_model=AuditResult)
def get_project_audit(project_id: int) -> AuditResult:
    try:
        stored = get_seo_audit(project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    if stored is None:
        raise HTTPException(status_code=404, detail="No SEO audit for this project yet")
    try:
        return AuditResult.model_validate(stored)
    except ValidationError:
        logger.exception("Stored SEO audit for project %s is unreadable", project_id)
        raise HTTPException(status_code=500, detail="Stored SEO audit is unreadable")


@app.get("/project/{project_id}/seo-audit/report", response_model=AuditReportResponse)
def get_project_audit_report(project_id: int) -> AuditReportResponse:
    """Score label, section bars and social share preview for the dashboard."""
    result = get_project_audit(project_id)
    return AuditReportResponse(**build_report(result))


@app.post("/seo-audit", response_model=AuditResult)
def audit_once(body: AuditRequest) -> AuditResult:
    """Audit a URL without storing the result."""
    return _run_audit(body.url)


@app.get("/health")
def health() -> dict:
    """Health check for deployment."""
    return {"status": "ok"}
