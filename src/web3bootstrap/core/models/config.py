"""
Bootstrap configuration — loaded from bootstrap.yml.

Every field has a default, so an absent file means "run the whole
checklist leniently and ask before installing Docker".
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from web3bootstrap.core.models.step import RunPolicy


class BootstrapConfig(BaseModel):
    """Validated bootstrap settings."""

    version: int = 1

    policy: RunPolicy = RunPolicy.LENIENT
    docker: Literal["ask", "yes", "no"] = "ask"
    profile: str = "~/.zprofile"
    refresh: bool = False
    skip: list[str] = Field(default_factory=list)
    only: list[str] = Field(default_factory=list)
    timeout: int | None = 1800

    @field_validator("docker", mode="before")
    @classmethod
    def _coerce_docker(cls, value: object) -> object:
        # YAML reads bare yes/no as booleans
        if value is True:
            return "yes"
        if value is False:
            return "no"
        return value

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        return value

    @property
    def assume_yes(self) -> bool | None:
        """Answer for confirmation prompts; None means ask."""
        return {"ask": None, "yes": True, "no": False}[self.docker]
