import re
import uuid

from bson import ObjectId

_STORAGE_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


def new_storage_id() -> str:
    return str(ObjectId())


def new_tracking_id() -> str:
    return uuid.uuid4().hex[:8]


def new_business_id() -> str:
    return uuid.uuid4().hex[:10]


def is_storage_id(value: str) -> bool:
    return bool(_STORAGE_ID_RE.fullmatch(value))
