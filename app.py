import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings
from errors import (
    EmptyResponse,
    ExtractionError,
    SchemaMismatch,
    ScreeningError,
    TransportError,
    UnsupportedFileType,
    ValidationError,
)
from matching.llm_gemini import GeminiClient
from matching.rewriter import rewrite_resume
from parsers.extract import extract_text, partition_supported
from schemas import BatchOutcome, JobDescription, JobIn, ResumeFile, RewriteIn, ThemeIn
from screening import ScreeningSession
from store import JobDescriptionStore, LocalStorage, ThemePreference

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def status_code_for(error: Optional[Exception]) -> int:
    if isinstance(error, (ValidationError, UnsupportedFileType)):
        return 400
    if isinstance(error, ExtractionError):
        return 422
    if isinstance(error, (EmptyResponse, SchemaMismatch, TransportError)):
        return 502
    return 500


async def _to_resume_file(upload: UploadFile) -> ResumeFile:
    return ResumeFile(
        name=upload.filename or "",
        content_type=upload.content_type or "",
        data=await upload.read(),
    )


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[LocalStorage] = None,
    client=None,
) -> FastAPI:
    """Build the API; anything not passed in is created from the environment at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = settings or Settings.from_env()
        store = storage
        if store is None:
            os.makedirs(cfg.base_dir, exist_ok=True)
            logger.info(f"Using base directory: {cfg.base_dir}")
            store = LocalStorage.from_url(cfg.resolved_database_url)
        app.state.settings = cfg
        app.state.storage = store
        app.state.jobs = JobDescriptionStore(store)
        app.state.theme = ThemePreference(store)
        app.state.client = client or GeminiClient.from_settings(cfg)
        yield
        logger.info("Application shutting down.")

    app = FastAPI(title="AI Resume Screening Dashboard", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # OK for demo - restrict for prod
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ScreeningError)
    async def screening_error_handler(request: Request, exc: ScreeningError):
        return JSONResponse(status_code=status_code_for(exc), content={"detail": str(exc)})

    # -------------------------------------------------------------------
    # Routes
    # -------------------------------------------------------------------
    @app.get("/health")
    def health():
        return {"status": "healthy", "model": app.state.settings.model_name}

    @app.post("/jobs", response_model=JobDescription)
    def create_job(job: JobIn, request: Request):
        """Save a job description typed into the form."""
        return request.app.state.jobs.add(job.title, job.description)

    @app.post("/jobs/upload", response_model=JobDescription)
    async def upload_job(request: Request, title: str = Form(...), jd_file: UploadFile = File(...)):
        """Save a job description read from a PDF/TXT upload."""
        upload = await _to_resume_file(jd_file)
        text = await run_in_threadpool(extract_text, upload, "Job Description")
        return request.app.state.jobs.add(title, text)

    @app.get("/jobs/list", response_model=List[JobDescription])
    def list_jobs(request: Request):
        return request.app.state.jobs.list()

    @app.delete("/jobs/{job_id}")
    def delete_job(job_id: str, request: Request):
        if not request.app.state.jobs.delete(job_id):
            raise HTTPException(status_code=404, detail=f"Job {job_id} not found.")
        return {"deleted": job_id}

    @app.post("/analyze", response_model=BatchOutcome)
    async def analyze(
        request: Request,
        resumes: List[UploadFile] = File(...),
        job_id: Optional[str] = Form(None),
        jd_text: Optional[str] = Form(None),
        jd_file: Optional[UploadFile] = File(None),
    ):
        """Screen a batch of resumes against one job description in a single model call."""
        files = [await _to_resume_file(r) for r in resumes]
        valid, rejected = partition_supported(files)
        if not valid:
            raise HTTPException(
                status_code=400,
                detail=f"Unsupported file(s): {', '.join(rejected)}. Please use PDF or TXT.",
            )

        if job_id:
            jd = request.app.state.jobs.get(job_id)
            if jd is None:
                raise HTTPException(status_code=404, detail=f"Job {job_id} not found.")
        elif jd_text and jd_text.strip():
            jd = jd_text
        elif jd_file is not None:
            jd = await _to_resume_file(jd_file)
        else:
            raise HTTPException(status_code=400, detail="Provide job_id, jd_text or jd_file.")

        session = ScreeningSession(request.app.state.client)
        session.select_files(valid)
        outcome = await run_in_threadpool(session.run, jd)
        outcome = outcome.model_copy(update={"rejected": rejected})
        if outcome.error is None:
            return outcome
        return JSONResponse(
            status_code=status_code_for(session.failure),
            content=outcome.model_dump(by_alias=True, mode="json"),
        )

    @app.post("/rewrite")
    def rewrite(body: RewriteIn, request: Request):
        return {"rewritten": rewrite_resume(request.app.state.client, body.resume_text, body.jd_text)}

    @app.get("/settings/theme")
    def get_theme(request: Request):
        return {"theme": request.app.state.theme.get()}

    @app.put("/settings/theme")
    def set_theme(body: ThemeIn, request: Request):
        return {"theme": request.app.state.theme.set(body.theme)}

    return app


app = create_app()
