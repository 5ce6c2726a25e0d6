"""FastAPI web application for CronFlow."""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from cronflow.engine.scheduler import format_relative, next_occurrences
from cronflow.grammar.compiler import compile_grammar
from cronflow.grammar.describe import describe_fields, explain
from cronflow.grammar.errors import GrammarError
from cronflow.models.constants import ERROR_MESSAGES
from cronflow.models.grammar import GrammarSpec
from cronflow.recurrence.interpret import HybridTranslator
from cronflow.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Initialize FastAPI app
app = FastAPI(
    title="CronFlow API",
    description="Turns plain-English schedules into five-field expressions and their next run times",
    version="0.1.0"
)


def get_now() -> datetime:
    """Reference instant for occurrence searches (overridden in tests)."""
    return datetime.now()


def get_translator() -> HybridTranslator:
    return HybridTranslator()


# Request models
class TranslateRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Schedule description, e.g. 'weekdays at 9am'")
    count: Optional[int] = Field(None, ge=1, le=50, description="Number of upcoming runs to return")


class ExplainRequest(BaseModel):
    expression: str = Field(..., description="Five-field expression, e.g. '30 9 * * 1-5'")
    count: Optional[int] = Field(None, ge=1, le=50, description="Number of upcoming runs to return")


# Response models
class Occurrence(BaseModel):
    """One upcoming run."""
    at: datetime
    relative: str


class ExplainResponse(BaseModel):
    """Response for expression explanation."""
    expression: str
    explanation: str
    fields: Dict[str, str] = Field(default_factory=dict, description="Per-field description")
    next_occurrences: List[Occurrence]


class TranslateResponse(ExplainResponse):
    """Response for natural-language translation."""
    source: str


def _occurrences(spec: GrammarSpec, now: datetime, count: Optional[int]) -> List[Occurrence]:
    moments = next_occurrences(spec, now, count or settings.occurrence_count)
    return [Occurrence(at=moment, relative=format_relative(moment, now)) for moment in moments]


def _grammar_error_detail(e: GrammarError) -> dict:
    return {"message": e.message, "field": e.field, "value": e.value}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.post("/translate", response_model=TranslateResponse)
async def translate(
    request: TranslateRequest,
    now: datetime = Depends(get_now),
    translator: HybridTranslator = Depends(get_translator),
):
    """Translate a natural-language schedule into an expression."""
    expression = translator.translate(request.text)
    if not expression:
        raise HTTPException(status_code=422, detail=ERROR_MESSAGES["NATURAL_LANGUAGE_FAILED"])

    try:
        spec = compile_grammar(expression)
    except GrammarError as e:
        logger.warning(f"Translated '{request.text}' to invalid expression '{expression}': {e.message}")
        raise HTTPException(status_code=400, detail=f"Invalid expression '{expression}': {e.message}")

    return TranslateResponse(
        expression=expression,
        source=translator.last_source.value,
        explanation=explain(spec),
        fields=describe_fields(spec),
        next_occurrences=_occurrences(spec, now, request.count),
    )


@app.post("/explain", response_model=ExplainResponse)
async def explain_expression(request: ExplainRequest, now: datetime = Depends(get_now)):
    """Validate an expression, describe it and list its next runs."""
    try:
        spec = compile_grammar(request.expression)
    except GrammarError as e:
        raise HTTPException(status_code=400, detail=_grammar_error_detail(e))

    return ExplainResponse(
        expression=spec.to_expression(),
        explanation=explain(spec),
        fields=describe_fields(spec),
        next_occurrences=_occurrences(spec, now, request.count),
    )
