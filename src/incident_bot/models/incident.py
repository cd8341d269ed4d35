"""Incident declaration and channel models."""

from pydantic import BaseModel, ConfigDict


def _blank_to_none(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Channel(BaseModel):
    """A channel created for an incident."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class IncidentRequest(BaseModel):
    """A submitted incident form. Immutable, consumed once per declaration."""

    model_config = ConfigDict(frozen=True)

    reporter_id: str
    commander_id: str
    comms_id: str | None = None
    title: str
    description: str | None = None

    @classmethod
    def from_submission(cls, payload: dict) -> "IncidentRequest":
        """Build a request from a dialog submission payload.

        Raises ValueError when the reporter, commander or title is missing.
        Blank optional fields are normalised to None.
        """
        user = payload.get("user") or {}
        submission = payload.get("submission") or {}

        reporter_id = _blank_to_none(user.get("id"))
        commander_id = _blank_to_none(submission.get("commander"))
        title = _blank_to_none(submission.get("title"))
        if reporter_id is None:
            raise ValueError("Submission is missing the invoking user")
        if commander_id is None:
            raise ValueError("Submission is missing the incident commander")
        if title is None:
            raise ValueError("Submission is missing the incident title")

        return cls(
            reporter_id=reporter_id,
            commander_id=commander_id,
            comms_id=_blank_to_none(submission.get("comms")),
            title=title,
            description=_blank_to_none(submission.get("description")),
        )
