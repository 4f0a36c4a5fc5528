# app.py
# DEPENDENCIES
import sys
import time
import signal
import psutil
import uvicorn
from typing import Any
from typing import List
from typing import Dict
from pathlib import Path
from fastapi import File
from fastapi import Form
from pydantic import Field
from fastapi import FastAPI
from fastapi import Request
from typing import Optional
from pydantic import BaseModel
from fastapi import UploadFile
from fastapi import HTTPException
from fastapi.responses import Response
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from utils.logger import log_info
from utils.logger import log_error
from config.settings import settings
from reporter.diff_renderer import render_html
from reporter.diff_renderer import render_text
from utils.logger import ContraScopeLogger
from reporter.diff_renderer import RenderOptions
from utils.exceptions import ContraScopeError
from services.data_models import current_timestamp
from reporter.json_exporter import export_analysis
from reporter.json_exporter import export_analysis_json
from reporter.json_exporter import export_file_name
from reporter.pdf_generator import generate_pdf_report
from services.remote_client import analysis_to_remote_payload
from services.review_service import ContractReviewService


# PYDANTIC SCHEMAS
class HealthResponse(BaseModel):
    status            : str
    version           : str
    timestamp         : str
    rules_loaded      : int
    remote_configured : bool
    signatures        : int
    memory_usage_mb   : float


class ErrorResponse(BaseModel):
    error     : str
    detail    : str
    timestamp : str


class TextRequest(BaseModel):
    text : str


class CompareRequest(BaseModel):
    text_a : str           = ""
    text_b : str           = ""
    theme  : Optional[str] = None


class QuestionRequest(BaseModel):
    text     : str = ""
    question : str


class SignRequest(BaseModel):
    fileName   : Optional[str] = None
    analyzedAt : Optional[str] = None
    signer     : str           = ""
    email      : str           = ""


class ExportRequest(BaseModel):
    text     : str
    fileName : Optional[str] = Field(default = None, description = "Source file name; pasted text when omitted")



# FASTAPI APPLICATION : Global instances
review_service : Optional[ContractReviewService] = None
app_start_time                                   = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    global review_service

    if not ContraScopeLogger.is_configured():
        ContraScopeLogger.setup(log_dir = settings.LOG_DIR, level = settings.LOG_LEVEL)

    log_info(f"{settings.APP_NAME} v{settings.APP_VERSION} starting up")

    try:
        review_service = ContractReviewService()

    except ContraScopeError as e:
        log_error(e, context = {"phase" : "startup"})
        raise

    log_info("Server ready", host = settings.HOST, port = settings.PORT, api_prefix = settings.API_PREFIX)

    try:
        yield

    finally:
        log_info("Server shutdown complete", uptime_seconds = round(time.time() - app_start_time, 1))


# Define the application
app = FastAPI(title       = settings.APP_NAME,
              version     = settings.APP_VERSION,
              description = "Heuristic contract clause-risk review, word diff and keyword search",
              docs_url    = "/api/docs",
              redoc_url   = "/api/redoc",
              lifespan    = lifespan,
             )

# CORS middleware
app.add_middleware(CORSMiddleware,
                   allow_origins     = settings.CORS_ORIGINS,
                   allow_credentials = settings.CORS_ALLOW_CREDENTIALS,
                   allow_methods     = settings.CORS_ALLOW_METHODS,
                   allow_headers     = settings.CORS_ALLOW_HEADERS,
                  )


# HELPER FUNCTIONS
def get_service() -> ContractReviewService:
    if not review_service:
        raise HTTPException(status_code = 503,
                            detail      = "Service not initialized",
                           )

    return review_service


def error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code = status_code,
                        content     = ErrorResponse(error     = error,
                                                    detail    = detail,
                                                    timestamp = current_timestamp(),
                                                   ).model_dump(),
                       )


def download_headers(file_name: str) -> Dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{file_name}"'}


# ROUTES
@app.get(f"{settings.API_PREFIX}/health", response_model = HealthResponse)
async def health_check():
    service = get_service()

    return HealthResponse(status            = "healthy",
                          version           = settings.APP_VERSION,
                          timestamp         = current_timestamp(),
                          rules_loaded      = len(service.analyzer.rules),
                          remote_configured = service.client.is_configured,
                          signatures        = len(service.ledger),
                          memory_usage_mb   = round(psutil.Process().memory_info().rss / 1024 / 1024, 2),
                         )


@app.get(f"{settings.API_PREFIX}/rules")
async def get_clause_rules():
    return get_service().analyzer.describe_rules()


@app.post(f"{settings.API_PREFIX}/analyze")
async def analyze_remote_shape(request: TextRequest):
    """
    Same request/response shape as the remote analysis endpoint, so one instance can serve another
    """
    result = await get_service().analyze_text(request.text)

    return analysis_to_remote_payload(result)


@app.post(f"{settings.API_PREFIX}/analyze/text")
async def analyze_contract_text(contract_text: str = Form(..., description = "Contract text to analyze")):
    result = await get_service().analyze_text(contract_text)

    return result.to_dict()


@app.post(f"{settings.API_PREFIX}/analyze/file")
async def analyze_contract_file(file: UploadFile = File(...)):
    content = await file.read()
    outcome = await get_service().analyze_document(file.filename, content)

    return outcome.unwrap().to_dict()


@app.post(f"{settings.API_PREFIX}/compare")
async def compare_texts(request: CompareRequest):
    service = get_service()
    tokens  = await service.compare_texts(request.text_a, request.text_b)
    options = RenderOptions(theme = request.theme or settings.DIFF_THEME)

    return {"tokens"  : [token.to_dict() for token in tokens],
            "summary" : service.diff_engine.summarize(tokens).to_dict(),
            "html"    : render_html(tokens, options),
            "text"    : render_text(tokens),
           }


@app.post(f"{settings.API_PREFIX}/compare/files")
async def compare_files(file_a: Optional[UploadFile] = File(None), file_b: Optional[UploadFile] = File(None), theme: Optional[str] = Form(None)):
    service = get_service()
    doc_a   = (file_a.filename, await file_a.read()) if file_a is not None else None
    doc_b   = (file_b.filename, await file_b.read()) if file_b is not None else None

    tokens  = (await service.compare_documents(doc_a, doc_b)).unwrap()
    options = RenderOptions(theme = theme or settings.DIFF_THEME)

    return {"fileA"   : doc_a[0],
            "fileB"   : doc_b[0],
            "tokens"  : [token.to_dict() for token in tokens],
            "summary" : service.diff_engine.summarize(tokens).to_dict(),
            "html"    : render_html(tokens, options),
           }


@app.post(f"{settings.API_PREFIX}/qa")
async def ask_question(request: QuestionRequest) -> List[Dict[str, Any]]:
    hits = await get_service().ask(request.text, request.question)

    return [hit.to_dict() for hit in hits]


@app.post(f"{settings.API_PREFIX}/sign")
async def sign_analysis(request: SignRequest):
    record = await get_service().sign_source(source_identifier = request.fileName,
                                             analyzed_at       = request.analyzedAt,
                                             signer_name       = request.signer,
                                             signer_email      = request.email,
                                            )

    return record.to_dict()


@app.get(f"{settings.API_PREFIX}/signatures")
async def list_signatures():
    return [record.to_dict() for record in get_service().signature_history()]


@app.post(f"{settings.API_PREFIX}/export/json")
async def export_json(request: ExportRequest):
    result = await get_service().analyze_text(request.text, source_identifier = request.fileName or ContractReviewService.PASTED_TEXT_SOURCE)

    return Response(content    = export_analysis_json(result),
                    media_type = "application/json; charset=utf-8",
                    headers    = download_headers(export_file_name(result)),
                   )


@app.post(f"{settings.API_PREFIX}/export/pdf")
async def export_pdf(request: ExportRequest):
    result     = await get_service().analyze_text(request.text, source_identifier = request.fileName or ContractReviewService.PASTED_TEXT_SOURCE)
    pdf_buffer = generate_pdf_report(export = export_analysis(result))
    file_name  = export_file_name(result).replace(".json", ".pdf")

    return Response(content    = pdf_buffer.getvalue(),
                    media_type = "application/pdf",
                    headers    = download_headers(file_name),
                   )


# ERROR HANDLERS AND MIDDLEWARE
@app.exception_handler(ContraScopeError)
async def contrascope_exception_handler(request: Request, exc: ContraScopeError):
    log_info("Request rejected", path = request.url.path, error_type = type(exc).__name__, reason = str(exc))

    return error_response(status_code = 400, error = exc.user_message, detail = str(exc))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return error_response(status_code = exc.status_code, error = str(exc.detail), detail = str(exc.detail))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    log_error(exc, context = {"path" : request.url.path, "method" : request.method})

    return error_response(status_code = 500, error = "Internal server error", detail = str(exc))


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time   = time.time()
    response     = await call_next(request)
    process_time = time.time() - start_time

    log_info(f"API Request: {request.method} {request.url.path}",
             status_code      = response.status_code,
             duration_seconds = round(process_time, 3),
            )

    return response



# MAIN
def main():
    def signal_handler(sig, frame):
        print("\nReceived Ctrl+C, shutting down gracefully...")
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)

    ContraScopeLogger.setup(log_dir = settings.LOG_DIR, level = settings.LOG_LEVEL)

    try:
        uvicorn.run("app:app",
                    host      = settings.HOST,
                    port      = settings.PORT,
                    reload    = settings.RELOAD,
                    workers   = settings.WORKERS,
                    log_level = settings.LOG_LEVEL.lower(),
                   )

    except KeyboardInterrupt:
        print("\nServer stopped by user")

    except Exception as e:
        log_error(e, context = {"phase" : "serve"})

        sys.exit(1)


if __name__ == "__main__":
    main()
