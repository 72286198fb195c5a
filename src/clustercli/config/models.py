# src/clustercli/config/models.py

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class ClusterSettings(BaseModel):
    """Per-invocation settings handed to every runner and builder."""

    inventory: str                               # ansible inventory file / source
    host_pattern: Optional[str] = None           # None means "all"
    verbose: int = Field(default=0, ge=0)        # number of -v flags
    capture_output: bool = False                 # capture stdout instead of streaming it
    ansible_config: Optional[str] = None         # exported as ANSIBLE_CONFIG for every call

    @field_validator("inventory")
    @classmethod
    def _inventory_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("inventory must not be empty")
        return v

    @field_validator("host_pattern")
    @classmethod
    def _blank_pattern_is_all(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v
