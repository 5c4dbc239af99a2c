from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class DifficultyLevel(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class BloomLevel(int, Enum):
    remember = 1
    understand = 2
    apply = 3
    analyze = 4
    evaluate = 5
    create = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()


class QuestionType(str, Enum):
    mcq = "mcq"
    short = "short"
    long = "long"
    descriptive = "descriptive"
    numerical = "numerical"
    true_false = "true_false"
    fill_blank = "fill_blank"


class PaperStatus(str, Enum):
    draft = "draft"
    final = "final"


class GenerationMethod(str, Enum):
    external = "external"
    fallback = "fallback"


class FallbackReason(str, Enum):
    service_unavailable = "service_unavailable"
    exhausted = "exhausted"


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    course_id: int
    unit_id: int
    text: str
    marks: int = Field(ge=1)
    bloom_level: BloomLevel = BloomLevel.remember
    difficulty: DifficultyLevel = DifficultyLevel.medium
    question_type: QuestionType = QuestionType.short


class Unit(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    course_id: int
    unit_number: int
    title: str
    topics: list[str] = Field(default_factory=list)


class GenerationConfig(BaseModel):
    course_id: int
    exam_type: str = "mid"
    total_marks: int
    units: list[Unit] = Field(default_factory=list)

    # Percentages per level; checked by the validator, not here.
    difficulty_distribution: dict[str, float] = Field(default_factory=dict)
    bloom_distribution: dict[int, float] = Field(default_factory=dict)

    @property
    def unit_ids(self) -> list[int]:
        return [u.id for u in self.units]


class PaperQuestion(BaseModel):
    """Snapshot of a question as it was when the paper was generated."""

    id: int
    text: str
    marks: int
    unit_id: int
    bloom_level: BloomLevel
    difficulty: DifficultyLevel
    question_type: QuestionType

    @classmethod
    def from_question(cls, q: Question) -> "PaperQuestion":
        return cls(
            id=q.id,
            text=q.text,
            marks=q.marks,
            unit_id=q.unit_id,
            bloom_level=q.bloom_level,
            difficulty=q.difficulty,
            question_type=q.question_type,
        )


class GeneratedPaper(BaseModel):
    paper_id: str
    course_id: int
    exam_type: str
    questions: list[PaperQuestion] = Field(default_factory=list)

    requested_total_marks: int
    achieved_total_marks: int = 0
    declared_total_marks: Optional[int] = None

    config: GenerationConfig
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: PaperStatus = PaperStatus.final
    generation_method: GenerationMethod

    model: Optional[str] = None
    fallback_reason: Optional[FallbackReason] = None
    warnings: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def shortfall_marks(self) -> int:
        return max(0, self.requested_total_marks - self.achieved_total_marks)

    @property
    def is_empty(self) -> bool:
        return not self.questions


class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


class GeneratePaperRequest(BaseModel):
    config: GenerationConfig
    # When omitted the pool is read from the question source for the course.
    questions: Optional[list[Question]] = None
    persist: bool = False
    seed: Optional[int] = None
