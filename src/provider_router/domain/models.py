"""Domain value objects representing provider routing concepts."""

from __future__ import annotations

from enum import Enum
from typing import Any, FrozenSet, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass

from provider_router.utils.parsing import parse_json_safely


class ProviderFamily(str, Enum):
    """Well-known provider families; catalog entries may use any other tag."""

    OPENAI = "openai"
    GEMINI = "gemini"
    GEMMA = "gemma"
    CUSTOM = "custom"


class TaskType(str, Enum):
    """Kinds of work a caller can ask the router to perform."""

    CONTENT_GENERATION = "content-generation"
    ANALYSIS = "analysis"
    CONVERSATION = "conversation"
    CODE = "code"
    RESEARCH = "research"
    REASONING = "reasoning"
    CREATIVE = "creative"
    STRUCTURED_DATA = "structured-data"


class Level(str, Enum):
    """Three-step scale shared by task complexity and urgency."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CommunicationStyle(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    TECHNICAL = "technical"


class ResponseLength(str, Enum):
    BRIEF = "brief"
    DETAILED = "detailed"
    COMPREHENSIVE = "comprehensive"


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    AUTHORITATIVE = "authoritative"


@pydantic_dataclass(frozen=True)
class ProviderCapability:
    """Immutable catalog entry describing one provider/model option."""

    id: str
    family: str
    cost_efficiency: int = Field(..., ge=1, le=10)
    speed: int = Field(..., ge=1, le=10)
    accuracy: int = Field(..., ge=1, le=10)
    context_window_tokens: int = Field(..., gt=0)
    model: str = ""
    strengths: FrozenSet[str] = Field(default_factory=frozenset)
    weaknesses: FrozenSet[str] = Field(default_factory=frozenset)
    optimal_for: FrozenSet[str] = Field(default_factory=frozenset)

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("id must be a non-empty string")
        return value

    @field_validator("family", mode="before")
    @classmethod
    def normalize_family(cls, value: Any) -> str:
        if isinstance(value, ProviderFamily):
            value = value.value
        value = str(value).strip().lower()
        if not value:
            raise ValueError("family must be a non-empty tag")
        return value

    @field_validator("strengths", "weaknesses", "optimal_for")
    @classmethod
    def validate_tags(cls, value: Sequence[str] | FrozenSet[str]) -> FrozenSet[str]:
        return frozenset(value)

    @property
    def model_id(self) -> str:
        """Model name sent to the provider client."""

        return self.model or self.id.split(":", 1)[-1]


class ProfilePreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    communication_style: CommunicationStyle = CommunicationStyle.FORMAL
    response_length: ResponseLength = ResponseLength.DETAILED
    tone: Tone = Tone.PROFESSIONAL


class ProfileHistory(BaseModel):
    model_config = ConfigDict(frozen=True)

    previous_interactions: int = Field(default=0, ge=0)
    successful_tasks: FrozenSet[str] = Field(default_factory=frozenset)
    preferred_providers: Tuple[str, ...] = Field(default_factory=tuple)


class CallerProfile(BaseModel):
    """Optional preference/history data about whoever requested the call."""

    model_config = ConfigDict(frozen=True)

    id: str
    ai_score: float = Field(default=50.0, ge=0, le=100)
    name: Optional[str] = None
    industry: Optional[str] = None
    preferences: ProfilePreferences = Field(default_factory=ProfilePreferences)
    history: ProfileHistory = Field(default_factory=ProfileHistory)


class TaskDescriptor(BaseModel):
    """Caller-supplied description of the work to route."""

    model_config = ConfigDict(frozen=True)

    type: TaskType
    complexity: Level = Level.MEDIUM
    urgency: Level = Level.MEDIUM
    token_limit: Optional[int] = Field(default=None, gt=0)
    requires_real_time: bool = False
    needs_structured_output: bool = False
    caller_profile: Optional[CallerProfile] = None
    context: str = ""


class ScoredCandidate(BaseModel):
    """A capability paired with its suitability score for one selection."""

    model_config = ConfigDict(frozen=True)

    capability: ProviderCapability
    score: float


class SelectionResult(BaseModel):
    """Outcome of a selector run: the winner plus the full ranking."""

    model_config = ConfigDict(frozen=True)

    chosen: ProviderCapability
    ranked: Tuple[ScoredCandidate, ...]
    adjusted_by_profile: bool = False
    used_unfiltered_catalog: bool = False

    @model_validator(mode="after")
    def ensure_chosen_leads_ranking(self) -> "SelectionResult":
        if not self.ranked:
            raise ValueError("ranked candidates must not be empty")
        if self.ranked[0].capability.id != self.chosen.id:
            raise ValueError("chosen provider must be the top ranked candidate")
        return self

    @property
    def top_score(self) -> float:
        return self.ranked[0].score


class ExecutionOutcome(BaseModel):
    """Text produced by the executor and which provider served it."""

    model_config = ConfigDict(frozen=True)

    text: str
    served_by: ProviderCapability
    attempts: int = Field(..., ge=1, le=2)
    fallback_used: bool = False
    latency: float = Field(default=0.0, ge=0)


class RouteResult(BaseModel):
    """Value returned to callers of ``Router.route``."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    text: str
    provider_id: str
    model_id: str
    fallback_used: bool = False
    attempts: int = Field(default=1, ge=1)
    latency: float = Field(default=0.0, ge=0)

    def parse_json(self) -> Any:
        """Decode the text as JSON, tolerating markdown fences and chatter."""

        return parse_json_safely(self.text)
