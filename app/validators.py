import re

from fastapi import HTTPException

DISCORD_ID_RE = re.compile(r"[0-9]{17,19}")

MISSING_FIELDS = "missing_fields"
INVALID_DISCORD_ID = "invalid_discord_id"


def require_fields(*values: object) -> None:
    if any(value is None or value == "" for value in values):
        raise HTTPException(status_code=400, detail=MISSING_FIELDS)


def validate_discord_id(discord_id: str) -> None:
    if not DISCORD_ID_RE.fullmatch(discord_id):
        raise HTTPException(status_code=400, detail=INVALID_DISCORD_ID)
