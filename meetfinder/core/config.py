import os
from typing import Literal, Optional

from pydantic import BaseModel

PRUNE_CUMULATIVE = "cumulative"
PRUNE_PER_SIZE = "per_size"


class FinderConfig(BaseModel):
    prune_policy: Literal["cumulative", "per_size"] = PRUNE_CUMULATIVE
    max_optional_attendees: Optional[int] = None
    log_queries: bool = True


def _env_bool(key: str, default: bool) -> bool:
    raw = (os.getenv(key) or "").strip().lower()
    if not raw:
        return default
    return raw in ("true", "1", "yes")


def load_config() -> FinderConfig:
    policy = (os.getenv("MEETFINDER_PRUNE_POLICY") or PRUNE_CUMULATIVE).strip().lower()

    cap_str = (os.getenv("MEETFINDER_MAX_OPTIONAL_ATTENDEES") or "").strip()
    max_optional = int(cap_str) if cap_str.isdigit() else None

    return FinderConfig(
        prune_policy=policy,
        max_optional_attendees=max_optional,
        log_queries=_env_bool("MEETFINDER_LOG_QUERIES", True),
    )
