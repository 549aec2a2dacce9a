import os
import time
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from studygen.config import get_settings
from studygen.content import ContentAssembler
from studygen.errors import (
    EmptyInputError,
    GenerationError,
    InvalidParameterError,
    KnowledgeBaseNotFoundError,
    NoConceptsExtractedError,
)
from studygen.ingest import normalize_extracted_text
from studygen.knowledge_base import InMemoryKnowledgeBase, KnowledgeBaseEntry, KnowledgeBaseRepository
from studygen.models import EducationContent
from studygen.utils import get_logger, log_error, log_request, set_request_context

LOG = get_logger()

settings = get_settings()

app = FastAPI(title='StudyGen Service', version='1.0.0', description='Offline flashcard and MCQ generation from study text')

# CORS config
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins_list or ['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


def get_knowledge_base() -> KnowledgeBaseRepository:
    return InMemoryKnowledgeBase.get_instance()


def get_assembler() -> ContentAssembler:
    return ContentAssembler(settings=get_settings())


def _request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', None) or os.urandom(8).hex()


def _error(status_code: int, error: str, details: str, request_id: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'success': False, 'error': error, 'details': details, 'request_id': request_id})


@app.middleware('http')
async def add_request_id_and_logging(request: Request, call_next):
    # prefer incoming X-Request-ID header for cross-service tracing
    request_id = request.headers.get('x-request-id') or os.urandom(8).hex()
    request.state.request_id = request_id
    set_request_context(request_id)
    start = time.time()
    client = request.client.host if request.client else None
    LOG.info('http_request_start', extra={'method': request.method, 'path': request.url.path, 'client': client})
    try:
        response: Response = await call_next(request)
    except Exception:
        LOG.exception('Unhandled exception in request', exc_info=True)
        body = {'success': False, 'error': 'Internal server error', 'details': None, 'request_id': request_id}
        return JSONResponse(status_code=500, content=body, headers={'X-Request-ID': request_id})
    duration = int((time.time() - start) * 1000)
    log_request(request_id, request.method, request.url.path, response.status_code, duration, ip=client)
    # echo back the request id for downstream tracing
    response.headers['X-Request-ID'] = request_id
    return response


@app.get('/health')
async def health():
    return {'status': 'ok', 'timestamp': datetime.now(timezone.utc).isoformat(), 'service': 'studygen'}


class EducationGenerateRequest(BaseModel):
    text: Optional[str] = Field(None, description='Source text to generate from')
    knowledge_base_id: Optional[str] = Field(None, description='Stored knowledge base entry to generate from')
    flashcard_count: int = Field(5, description='Number of flashcards (0 skips flashcards)')
    mcq_count: int = Field(3, description='Number of MCQs (0 skips MCQs)')
    difficulty: str = Field('beginner', description='beginner|intermediate|advanced')
    bloom_level: str = Field('remember', description='remember|understand|apply|analyze|evaluate|create')
    seed: Optional[int] = Field(None, description='Seed for reproducible output')
    # source validation is performed in the handler to return 400 instead of
    # FastAPI/Pydantic's default 422


class EducationGenerateResponse(BaseModel):
    success: bool
    content: EducationContent
    request_id: str


class KnowledgeBaseSaveRequest(BaseModel):
    content: str
    title: Optional[str] = None
    filename: Optional[str] = None
    type: Optional[str] = Field(None, description='pdf|docx|image|text')
    size: Optional[int] = None
    extracted_at: Optional[str] = None


class KnowledgeBaseEntryResponse(BaseModel):
    success: bool
    entry: KnowledgeBaseEntry
    request_id: str


class KnowledgeBaseListResponse(BaseModel):
    success: bool
    entries: List[KnowledgeBaseEntry]
    request_id: str


@app.post('/education/generate', response_model=EducationGenerateResponse)
async def generate_education_endpoint(req: EducationGenerateRequest, fastapi_request: Request,
                                      knowledge_base: KnowledgeBaseRepository = Depends(get_knowledge_base),
                                      assembler: ContentAssembler = Depends(get_assembler)):
    request_id = _request_id(fastapi_request)
    if (req.text is None) == (req.knowledge_base_id is None):
        return _error(400, 'Invalid source', 'Provide exactly one of text or knowledge_base_id', request_id)

    LOG.info('education_generation_start', extra={
        'flashcard_count': req.flashcard_count,
        'mcq_count': req.mcq_count,
        'difficulty': req.difficulty,
        'bloom_level': req.bloom_level,
        'from_knowledge_base': req.knowledge_base_id is not None,
    })
    try:
        if req.knowledge_base_id is not None:
            text = knowledge_base.load(req.knowledge_base_id).source.content
        else:
            text = req.text
        content = await assembler.assemble_async(
            text,
            req.flashcard_count,
            req.mcq_count,
            req.difficulty,
            req.bloom_level,
            seed=req.seed,
        )
        return EducationGenerateResponse(success=True, content=content, request_id=request_id)
    except KnowledgeBaseNotFoundError as e:
        LOG.warning('knowledge_base_entry_missing', extra={'knowledge_base_id': req.knowledge_base_id})
        return _error(404, 'Knowledge base entry not found', str(e), request_id)
    except EmptyInputError as e:
        return _error(400, 'Empty text', str(e), request_id)
    except InvalidParameterError as e:
        return _error(400, 'Invalid parameters', str(e), request_id)
    except NoConceptsExtractedError as e:
        LOG.warning('no_concepts_extracted', extra={'details': str(e)})
        return _error(422, 'No concepts extracted', str(e), request_id)
    except GenerationError as e:
        log_error(e, {'stage': 'education_generation'})
        return _error(500, 'Content generation failed', str(e), request_id)
    except Exception as e:
        LOG.exception('education_generation_unknown_error', exc_info=True)
        return _error(500, 'Unexpected error', str(e), request_id)


@app.post('/knowledge-base', response_model=KnowledgeBaseEntryResponse, status_code=201)
async def save_knowledge_base_entry(req: KnowledgeBaseSaveRequest, fastapi_request: Request,
                                    knowledge_base: KnowledgeBaseRepository = Depends(get_knowledge_base)):
    request_id = _request_id(fastapi_request)
    record = req.model_dump(exclude={'title'}, exclude_none=True)
    try:
        extracted = normalize_extracted_text(record)
    except InvalidParameterError as e:
        return _error(400, 'Invalid extracted text', str(e), request_id)
    if not extracted.content:
        return _error(400, 'Empty text', 'content is blank after cleaning', request_id)

    entry = knowledge_base.save(extracted, title=req.title)
    return KnowledgeBaseEntryResponse(success=True, entry=entry, request_id=request_id)


@app.get('/knowledge-base', response_model=KnowledgeBaseListResponse)
async def list_knowledge_base_entries(fastapi_request: Request,
                                      knowledge_base: KnowledgeBaseRepository = Depends(get_knowledge_base)):
    return KnowledgeBaseListResponse(success=True, entries=knowledge_base.list(), request_id=_request_id(fastapi_request))


@app.get('/knowledge-base/{entry_id}', response_model=KnowledgeBaseEntryResponse)
async def get_knowledge_base_entry(entry_id: str, fastapi_request: Request,
                                   knowledge_base: KnowledgeBaseRepository = Depends(get_knowledge_base)):
    request_id = _request_id(fastapi_request)
    try:
        entry = knowledge_base.load(entry_id)
    except KnowledgeBaseNotFoundError as e:
        return _error(404, 'Knowledge base entry not found', str(e), request_id)
    return KnowledgeBaseEntryResponse(success=True, entry=entry, request_id=request_id)


@app.delete('/knowledge-base/{entry_id}')
async def delete_knowledge_base_entry(entry_id: str, fastapi_request: Request,
                                      knowledge_base: KnowledgeBaseRepository = Depends(get_knowledge_base)):
    request_id = _request_id(fastapi_request)
    try:
        knowledge_base.delete(entry_id)
    except KnowledgeBaseNotFoundError as e:
        return _error(404, 'Knowledge base entry not found', str(e), request_id)
    return {'success': True, 'id': entry_id, 'request_id': request_id}


@app.on_event('startup')
async def on_startup():
    LOG.info('StudyGen service starting', extra={'env': settings.environment})
    if settings.default_seed is not None:
        LOG.warning('Default seed configured; unseeded requests will be reproducible', extra={'seed': settings.default_seed})


@app.on_event('shutdown')
async def on_shutdown():
    LOG.info('StudyGen service shutting down')


if __name__ == '__main__':
    import uvicorn

    # uvicorn does not support reload with multiple workers
    workers = int(os.getenv('WORKERS', '1'))
    if settings.environment == 'development':
        workers = 1
    reload_enabled = (settings.environment == 'development') and (workers == 1)

    uvicorn.run(
        'studygen.main:app',
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=reload_enabled,
        workers=workers,
    )
