from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model whose JSON form uses the camelCase keys lamp clients send."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def as_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
