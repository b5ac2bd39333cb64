from enum import Enum
from typing import Optional


class ComponentCategory(str, Enum):
    FRONTEND = "frontend"      # client-facing
    CDN = "cdn"                # edge-delivery
    GATEWAY = "gateway"
    BACKEND = "backend"        # backend-service
    SERVICE = "service"        # application-service
    DATABASE = "database"      # data-store
    CACHE = "cache"
    QUEUE = "queue"            # messaging-queue


class ConnectionKind(str, Enum):
    API = "api"
    DATA = "data"
    STREAM = "stream"


KNOWN_CATEGORIES = {c.value for c in ComponentCategory}

# Long-form names accepted next to the wire values.
CATEGORY_ALIASES = {
    "client-facing": ComponentCategory.FRONTEND,
    "edge-delivery": ComponentCategory.CDN,
    "backend-service": ComponentCategory.BACKEND,
    "application-service": ComponentCategory.SERVICE,
    "data-store": ComponentCategory.DATABASE,
    "messaging-queue": ComponentCategory.QUEUE,
}

CONNECTION_KIND_ALIASES = {
    "api-call": ConnectionKind.API,
    "data-flow": ConnectionKind.DATA,
    "streaming": ConnectionKind.STREAM,
}


def _clean(value: str) -> str:
    return value.strip().lower().replace("_", "-").replace(" ", "-")


def to_category(value) -> Optional[ComponentCategory]:
    """Resolve a raw or alias type tag; None when it is not a known category."""
    if not isinstance(value, str):
        return None
    cleaned = _clean(value)
    if cleaned in KNOWN_CATEGORIES:
        return ComponentCategory(cleaned)
    return CATEGORY_ALIASES.get(cleaned)


def normalize_component_type(value) -> str:
    """
    LLM output has no enforced schema, so the type tag is an open string.
    Known tags and their aliases come back canonical; anything else is kept
    (lower-cased) and ends up ungrouped.
    """
    if not isinstance(value, str):
        return "unknown"
    category = to_category(value)
    if category is not None:
        return category.value
    cleaned = value.strip().lower()
    return cleaned or "unknown"


def normalize_connection_kind(value) -> ConnectionKind:
    if isinstance(value, str):
        cleaned = _clean(value)
        if cleaned in {k.value for k in ConnectionKind}:
            return ConnectionKind(cleaned)
        if cleaned in CONNECTION_KIND_ALIASES:
            return CONNECTION_KIND_ALIASES[cleaned]
    return ConnectionKind.API
