"""Incident declaration dialog schema."""

import json

INCIDENT_CALLBACK_ID = "submit-incident"


def build_incident_dialog(user_id: str) -> dict:
    """Dialog opened by ``/incident``. The commander defaults to the invoking user."""
    return {
        "title": "Create an Incident",
        "callback_id": INCIDENT_CALLBACK_ID,
        "submit_label": "Create",
        "elements": [
            {
                "label": "Incident Title",
                "type": "text",
                "name": "title",
                "placeholder": "Enter a title for this incident",
            },
            {
                "label": "Description",
                "type": "textarea",
                "name": "description",
                "optional": True,
            },
            {
                "label": "Incident Commander",
                "name": "commander",
                "type": "select",
                "value": user_id,
                "data_source": "users",
            },
            {
                "label": "Incident Communications",
                "name": "comms",
                "type": "select",
                "optional": True,
                "data_source": "users",
            },
        ],
    }


def encode_dialog(dialog: dict) -> str:
    return json.dumps(dialog)
