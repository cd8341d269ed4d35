"""Stage results and the aggregated outcome of one incident declaration."""

from enum import Enum

from pydantic import BaseModel, Field

from incident_bot.models.incident import Channel


class IncidentState(str, Enum):
    """Lifecycle of one incident declaration."""

    RECEIVED = "received"
    VERIFIED = "verified"
    CHANNEL_CREATED = "channel_created"
    PROVISIONED = "provisioned"
    SUMMARIZED = "summarized"
    DONE = "done"
    FAILED = "failed"


class StageResult(BaseModel):
    """Outcome of a single outbound step (invite, topic, notify, summary)."""

    stage: str
    ok: bool
    detail: str
    target: str | None = None  # User id for per-user stages

    @classmethod
    def success(cls, stage: str, detail: str, target: str | None = None) -> "StageResult":
        return cls(stage=stage, ok=True, detail=detail, target=target)

    @classmethod
    def failure(cls, stage: str, detail: str, target: str | None = None) -> "StageResult":
        return cls(stage=stage, ok=False, detail=detail, target=target)


class IncidentOutcome(BaseModel):
    """Everything that happened while provisioning one incident."""

    state: IncidentState = IncidentState.RECEIVED
    channel: Channel | None = None
    results: list[StageResult] = Field(default_factory=list)
    summary: StageResult | None = None
    error: str | None = None

    @property
    def failures(self) -> list[StageResult]:
        """All failed stage results, summary included."""
        stages = [*self.results, *([self.summary] if self.summary else [])]
        return [r for r in stages if not r.ok]
