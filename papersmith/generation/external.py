"""
External paper generation.

Asks an LLM to pick questions for a paper, trying candidate models in order
and validating every response before it is used. Exhaustion of all candidates
is reported with ExternalGenerationExhausted so the caller can fall back.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
import re
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from papersmith.errors import ExternalGenerationExhausted, GenerationCancelled, ServiceUnavailable
from papersmith.generation.prompts import SYSTEM_PROMPT, build_paper_prompt, source_entry
from papersmith.llm.client import LLMClient
from papersmith.llm.types import LLMRequest, LLMResponse
from papersmith.models import GenerationConfig, PaperQuestion, Question
from papersmith.observability import get_tracer

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)


class ExternalResult(BaseModel):
    model: str
    questions: list[PaperQuestion]
    total_marks: int
    declared_total_marks: Optional[int] = None


def parse_paper_response(text: str) -> Optional[dict[str, Any]]:
    """Return the decoded paper object, or None when it is not usable."""
    m = _FENCE_RE.match(text or "")
    if m:
        text = m.group(1)
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        return None
    return data


def _coerce_id(value: object) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None


def _declared_total(value: object) -> Optional[int]:
    # json.loads accepts Infinity, NaN and 1e400.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def normalize_questions(entries: list[Any], pool_by_id: dict[int, Question]) -> list[PaperQuestion]:
    """Map response entries onto pool questions.

    Entries that are not objects, reference unknown ids, or repeat an id are
    dropped. The pool copy is authoritative for marks, unit and levels.
    """
    out: list[PaperQuestion] = []
    seen: set[int] = set()
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        qid = _coerce_id(entry.get("id"))
        if qid is None or qid in seen:
            continue
        q = pool_by_id.get(qid)
        if q is None:
            logger.debug("Dropping question id %s not present in the source pool", qid)
            continue
        seen.add(qid)
        out.append(PaperQuestion.from_question(q))
    return out


class ExternalPaperGenerator:
    def __init__(
        self,
        client: LLMClient,
        models: list[str],
        *,
        provider: str,
        pool_cap: int = 50,
        backoff_s: float = 2.0,
        attempt_timeout_s: float = 60.0,
        temperature: float = 0.4,
        max_output_tokens: int = 4096,
    ) -> None:
        self.client = client
        self.models = list(models)
        self.provider = provider
        self.pool_cap = pool_cap
        self.backoff_s = backoff_s
        self.attempt_timeout_s = attempt_timeout_s
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    def candidate_pool(self, config: GenerationConfig, pool: list[Question]) -> list[Question]:
        selected = set(config.unit_ids)
        return [q for q in pool if q.unit_id in selected][: self.pool_cap]

    def _request(self, model: str, config: GenerationConfig, pool: list[Question]) -> LLMRequest:
        return LLMRequest.from_prompts(
            system=SYSTEM_PROMPT,
            user=build_paper_prompt(config, pool),
            provider=self.provider,
            model=model,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
            response_format="json",
            metadata={"total_marks": config.total_marks, "source_questions": [source_entry(q) for q in pool]},
        )

    async def _backoff(self, cancel: Optional[asyncio.Event]) -> None:
        if self.backoff_s <= 0:
            return
        if cancel is None:
            await asyncio.sleep(self.backoff_s)
            return
        try:
            await asyncio.wait_for(cancel.wait(), timeout=self.backoff_s)
        except asyncio.TimeoutError:
            return
        raise GenerationCancelled("generation cancelled during backoff")

    async def _call(self, req: LLMRequest, cancel: Optional[asyncio.Event]) -> LLMResponse:
        """Run one request, bounded by the attempt timeout and the cancel event."""
        if cancel is None:
            return await asyncio.wait_for(self.client.generate(req), timeout=self.attempt_timeout_s)

        call = asyncio.ensure_future(self.client.generate(req))
        cancelled = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {call, cancelled}, timeout=self.attempt_timeout_s, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            pending = [t for t in (call, cancelled) if not t.done()]
            for t in pending:
                t.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if call in done:
            return call.result()
        if cancelled in done:
            raise GenerationCancelled("generation cancelled during external attempt")
        raise asyncio.TimeoutError()

    def _read_result(self, model: str, text: str, pool_by_id: dict[int, Question]) -> ExternalResult:
        """Validate a response; raises ValueError when it cannot be used."""
        data = parse_paper_response(text)
        if data is None:
            raise ValueError("malformed response")
        questions = normalize_questions(data["questions"], pool_by_id)
        if not questions:
            raise ValueError("no usable questions in response")
        declared = _declared_total(data.get("totalMarks"))
        return ExternalResult(
            model=model,
            questions=questions,
            total_marks=declared if declared is not None else sum(q.marks for q in questions),
            declared_total_marks=declared,
        )

    async def generate(
        self,
        config: GenerationConfig,
        pool: list[Question],
        cancel: Optional[asyncio.Event] = None,
    ) -> ExternalResult:
        if not self.client.is_configured:
            raise ServiceUnavailable(f"no credential configured for LLM provider {self.provider!r}")

        candidates = self.candidate_pool(config, pool)
        pool_by_id = {q.id: q for q in candidates}
        tracer = get_tracer()
        attempts: dict[str, str] = {}

        for index, model in enumerate(self.models):
            if cancel is not None and cancel.is_set():
                raise GenerationCancelled("generation cancelled before external attempt")
            is_last = index == len(self.models) - 1

            with tracer.start_as_current_span("paper.external.attempt") as span:
                span.set_attribute("llm.provider", self.provider)
                span.set_attribute("llm.model", model)
                span.set_attribute("paper.pool.size", len(candidates))

                logger.info("Trying external model %s (%d/%d)", model, index + 1, len(self.models))
                try:
                    resp = await self._call(self._request(model, config, candidates), cancel)
                except GenerationCancelled:
                    span.set_attribute("paper.external.outcome", "cancelled")
                    raise
                except asyncio.TimeoutError:
                    attempts[model] = f"timed out after {self.attempt_timeout_s:g}s"
                    logger.warning("External model %s timed out", model)
                    span.set_attribute("paper.external.outcome", "timeout")
                    if not is_last:
                        await self._backoff(cancel)
                    continue
                except Exception as e:
                    attempts[model] = str(e) or type(e).__name__
                    logger.error("Error with external model %s: %s", model, e)
                    span.set_attribute("paper.external.outcome", "error")
                    if not is_last:
                        await self._backoff(cancel)
                    continue

                try:
                    result = self._read_result(model, resp.text, pool_by_id)
                except (ValueError, TypeError, OverflowError, ValidationError) as e:
                    attempts[model] = str(e)
                    logger.warning("Invalid paper from %s (%s): %.200s", model, e, resp.text)
                    span.set_attribute("paper.external.outcome", "malformed")
                    continue

                span.set_attribute("paper.external.outcome", "ok")
                span.set_attribute("paper.questions.count", len(result.questions))
                logger.info("External model %s selected %d questions", model, len(result.questions))
                return result

        raise ExternalGenerationExhausted(attempts)
