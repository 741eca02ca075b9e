from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel


class StatusResponse(BaseModel):
    status: str
    server: str
    version: str
    uptime: float
    timestamp: int
    # Filled only when the matching surface is mounted
    subscribers: Optional[int] = None
    topics: Optional[Dict[str, int]] = None
    logs: Optional[Dict[str, int]] = None
