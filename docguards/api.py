"""HTTP API for translating documented members.

Run:
  pip install docguards
  uvicorn docguards.api:create_app --factory --port 8000

Endpoints:
  GET  /health    -> {"status": "ok"}
  POST /translate -> {"results": [TranslationResult, ...]}
"""
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .config import TranslatorSettings, load_settings
from .doc_model import DocumentedMember
from .errors import ConfigurationError
from .program_model import InMemoryProgramModel, TypeInfo
from .translator import TranslationResult, build_translator


class TranslateRequest(BaseModel):
    types: List[TypeInfo] = []
    members: List[DocumentedMember]
    distance_threshold: Optional[int] = Field(None, ge=0)


class TranslateResponse(BaseModel):
    results: List[TranslationResult]


def create_app(settings: Optional[TranslatorSettings] = None) -> FastAPI:
    """Build the app; settings default to ``load_settings()`` at call time."""
    app = FastAPI(title="docguards")
    app.state.settings = settings or load_settings()

    @app.get('/health')
    async def health():
        return {'status': 'ok'}

    @app.post('/translate', response_model=TranslateResponse)
    def translate(req: TranslateRequest):
        settings = app.state.settings
        if req.distance_threshold is not None:
            settings = settings.model_copy(update={'distance_threshold': req.distance_threshold})
        program = InMemoryProgramModel(req.types)
        translator = build_translator(program, settings)
        try:
            results = [translator.translate(m) for m in req.members]
        except ConfigurationError as e:
            raise HTTPException(status_code=503, detail=str(e))
        return TranslateResponse(results=results)

    return app
