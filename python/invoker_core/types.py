"""Pydantic models for the invoker-core binding engine.

This module provides the type-safe data models shared across the
engine, using Pydantic v2 for validation:

- Logging: LogContext
- Configuration: InvokerConfig
- Operation metadata: Operation and its HTTP-verb subclasses
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

# =============================================================================
# Logging Types
# =============================================================================


class LogContext(BaseModel):
    """Context fields for structured logging.

    Example:
        >>> context = LogContext(handler_id="app.create_user", parameter="companyId")
        >>> log_debug("Parameter resolved", context)
    """

    correlation_id: str | None = Field(
        default=None,
        description="Correlation ID for request tracing.",
    )
    handler_id: str | None = Field(
        default=None,
        description="Registered identifier of the handler being dispatched.",
    )
    operation: str | None = Field(
        default=None,
        description="Name of the matched operation.",
    )
    parameter: str | None = Field(
        default=None,
        description="Handler parameter being resolved.",
    )
    resolver: str | None = Field(
        default=None,
        description="Value resolver that produced the argument.",
    )
    target: str | None = Field(
        default=None,
        description="Qualified name of the class being constructed.",
    )


# =============================================================================
# Configuration
# =============================================================================

ENV_PREFIX = "INVOKER_"


class InvokerConfig(BaseModel):
    """Configuration for the binding engine.

    Holds the reserved carrier attribute keys the bridges write and the
    resolvers read back, plus the payload parameter aliases.

    Example:
        >>> config = InvokerConfig(payload_aliases=["data", "input", "body"])
        >>> processor = build_processor(inner, container, config)
    """

    route_params_key: str = Field(
        default="route-params",
        min_length=1,
        description="Carrier attribute holding the merged raw named values.",
    )
    operation_key: str = Field(
        default="operation",
        min_length=1,
        description="Carrier attribute holding the matched operation.",
    )
    payload_key: str = Field(
        default="payload",
        min_length=1,
        description="Carrier attribute holding the write payload.",
    )
    payload_aliases: list[str] = Field(
        default_factory=lambda: ["data", "input"],
        description="Parameter names that always receive the payload.",
    )
    log_level: str = Field(
        default="info",
        pattern="^(trace|debug|info|warn|error)$",
        description="Log level for the invoker_core logger.",
    )
    handlers: dict[str, str] = Field(
        default_factory=dict,
        description="Handler identifier to dotted class path mapping.",
    )

    model_config = {"extra": "forbid"}

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> InvokerConfig:
        """Build a config from INVOKER_* environment variables.

        Args:
            environ: Environment mapping, defaults to os.environ.

        Returns:
            InvokerConfig with any overridden fields applied.

        Example:
            >>> InvokerConfig.from_env({"INVOKER_PAYLOAD_ALIASES": "data,body"}).payload_aliases
            ['data', 'body']
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        for field in ("route_params_key", "operation_key", "payload_key", "log_level"):
            raw = environ.get(f"{ENV_PREFIX}{field.upper()}")
            if raw:
                values[field] = raw.strip()

        aliases = environ.get(f"{ENV_PREFIX}PAYLOAD_ALIASES")
        if aliases:
            values["payload_aliases"] = [a.strip() for a in aliases.split(",") if a.strip()]

        return cls.model_validate(values)

    @classmethod
    def from_file(cls, path: str | Path) -> InvokerConfig:
        """Load a config from a YAML file.

        The file may hold the fields at the top level or under an
        ``invoker`` key.

        Args:
            path: Path to the YAML file.

        Returns:
            Validated InvokerConfig.

        Raises:
            pydantic.ValidationError: If the file holds unknown or invalid fields.
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if isinstance(data, dict) and isinstance(data.get("invoker"), dict):
            data = data["invoker"]

        return cls.model_validate(data)


# =============================================================================
# Operation Metadata
# =============================================================================


class Operation(BaseModel):
    """Descriptor of the matched route/operation.

    Carries the registered identifiers of the processor and provider
    the dispatch decorators look up.

    Example:
        >>> op = Post(name="create_user", processor="app.create_user")
        >>> op.method
        'POST'
    """

    name: str | None = Field(default=None, description="Operation name.")
    uri_template: str | None = Field(default=None, description="Matched URI template.")
    method: str = Field(default="GET", description="HTTP method.")
    processor: str | None = Field(
        default=None,
        description="Registered identifier of the write handler.",
    )
    provider: str | None = Field(
        default=None,
        description="Registered identifier of the read handler.",
    )
    extra_properties: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "forbid", "frozen": True}


class Get(Operation):
    """Item read operation."""

    method: str = "GET"


class GetCollection(Operation):
    """Collection read operation."""

    method: str = "GET"


class Post(Operation):
    method: str = "POST"


class Put(Operation):
    method: str = "PUT"


class Patch(Operation):
    method: str = "PATCH"


class Delete(Operation):
    method: str = "DELETE"
