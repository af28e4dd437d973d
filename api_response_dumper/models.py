"""Data models for recorded controller calls."""

from dataclasses import dataclass
from typing import Any

from starlette.exceptions import HTTPException

CONTROLLER_SUFFIX = "Controller"


class DumpError(Exception):
    """Base class for errors raised while dumping controller responses."""


class NotAController(DumpError):
    """The declaring class is not named like a controller."""


def controller_prefix(controller_name: str) -> str:
    """Controller name without the trailing 'Controller'.

    Raises:
        NotAController: If the name does not end in 'Controller'
    """
    if not controller_name.endswith(CONTROLLER_SUFFIX):
        raise NotAController(f"Invalid controller name: {controller_name}")
    return controller_name[: -len(CONTROLLER_SUFFIX)]


@dataclass(frozen=True)
class CallDescriptor:
    """Identifies one recorded call: which controller, which method, which test."""

    controller_name: str
    method_name: str
    test_name: str

    @property
    def controller_prefix(self) -> str:
        """Controller name without the trailing 'Controller'."""
        return controller_prefix(self.controller_name)


@dataclass(frozen=True)
class Success:
    """The controller method returned normally."""

    value: Any


@dataclass(frozen=True)
class Failure:
    """The controller method raised an HTTPException."""

    error: HTTPException

    @property
    def payload(self) -> Any:
        """The response content carried by the exception."""
        return self.error.detail


CallOutcome = Success | Failure


@dataclass
class RecordedCall:
    """A call that was executed and written out as a fragment."""

    descriptor: CallDescriptor
    outcome: CallOutcome
    value: Any  # what was serialized into the fragment

    @property
    def succeeded(self) -> bool:
        return isinstance(self.outcome, Success)
