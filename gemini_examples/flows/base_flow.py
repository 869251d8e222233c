# -*- coding: utf-8 -*-
"""
Base Flow
=========
Abstract base class for all example flows.
A flow is a named unit of work with a pydantic input schema and output
schema. Provides shared functionality:
  - Input validation
  - Lazy Gemini service integration
  - Logging with timing
  - Wrapping every failure into a user-facing FlowError
  - A registry so scripts can look flows up by name
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

logger = logging.getLogger("examples.flows")

INVALID_ARGUMENT = "INVALID_ARGUMENT"
INTERNAL = "INTERNAL"


class FlowError(Exception):
    """User-facing flow failure with a fixed status category."""

    def __init__(self, status: str, message: str, flow_name: Optional[str] = None):
        self.status = status
        self.message = message
        self.flow_name = flow_name
        super().__init__(f"[{status}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "flow": self.flow_name,
        }


class BaseFlow(ABC):
    """
    Abstract base class for all flows.

    Subclasses must define:
        - name, description (class attributes)
        - input_model, output_model (pydantic models)
        - execute(data, service) -> output_model instance
    """

    name: str = ""
    description: str = ""
    input_model: Type[BaseModel]
    output_model: Type[BaseModel]

    def __init__(self, service=None):
        self._service = service

    @property
    def service(self):
        """Gemini service, created on first use."""
        if self._service is None:
            from gemini_examples.services.gemini_service import GeminiService

            self._service = GeminiService()
        return self._service

    @abstractmethod
    def execute(self, data: BaseModel, service) -> BaseModel:
        """
        Execute the flow's core task.

        Args:
            data: Validated input model instance.
            service: GeminiService (or a compatible stand-in).

        Returns:
            Output model instance.
        """
        ...

    def run(self, raw_input: Union[Dict[str, Any], BaseModel]) -> BaseModel:
        """
        Validate input, execute, and wrap failures.

        Raises:
            FlowError: INVALID_ARGUMENT for bad input, INTERNAL otherwise.
        """
        try:
            if isinstance(raw_input, self.input_model):
                data = raw_input
            elif isinstance(raw_input, BaseModel):
                data = self.input_model.model_validate(raw_input.model_dump())
            else:
                data = self.input_model.model_validate(raw_input or {})
        except ValidationError as exc:
            raise FlowError(INVALID_ARGUMENT, _summarize_validation(exc), self.name) from exc

        start = time.monotonic()
        logger.info("[%s] Flow started", self.name)
        try:
            result = self.execute(data, self.service)
            if not isinstance(result, self.output_model):
                result = self.output_model.model_validate(result)
        except FlowError as exc:
            if exc.flow_name is None:
                exc.flow_name = self.name
            logger.error("[%s] Flow rejected: %s", self.name, exc)
            raise
        except Exception as exc:
            logger.error("[%s] Flow failed: %s", self.name, exc)
            raise FlowError(INTERNAL, f"{self.name} failed: {exc}", self.name) from exc

        logger.info("[%s] Flow finished in %.2fs", self.name, time.monotonic() - start)
        return result

    def fail(self, message: str) -> FlowError:
        """Build an INVALID_ARGUMENT error for rejections found inside execute()."""
        return FlowError(INVALID_ARGUMENT, message, self.name)


def _summarize_validation(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "input"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "Invalid input — " + "; ".join(parts)


# ---------------------------------------------------------------------------
# Flow registry
# ---------------------------------------------------------------------------

_REGISTRY: Dict[str, Type[BaseFlow]] = {}


def register_flow(cls: Type[BaseFlow]) -> Type[BaseFlow]:
    """Class decorator adding a flow to the registry under `cls.name`."""
    if not cls.name:
        raise ValueError(f"{cls.__name__} has no flow name")
    if cls.name in _REGISTRY and _REGISTRY[cls.name] is not cls:
        raise ValueError(f"Duplicate flow name '{cls.name}'")
    _REGISTRY[cls.name] = cls
    return cls


def get_flow(name: str, service=None) -> BaseFlow:
    """Instantiate a registered flow. Raises KeyError if not found."""
    try:
        cls = _REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown flow '{name}'. Valid flows: {sorted(_REGISTRY)}") from None
    return cls(service=service)


def list_flows() -> List[Type[BaseFlow]]:
    return [_REGISTRY[n] for n in sorted(_REGISTRY)]
