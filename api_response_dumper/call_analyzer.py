"""Inspect and execute deferred controller calls."""

import functools
import inspect
import json
import logging
import os
from collections.abc import Callable
from typing import Any

from fastapi.responses import Response, StreamingResponse
from starlette.exceptions import HTTPException

from api_response_dumper.models import (
    CallDescriptor,
    CallOutcome,
    DumpError,
    Failure,
    NotAController,
    Success,
    controller_prefix,
)

logger = logging.getLogger(__name__)


class InvalidCallShape(DumpError, ValueError):
    """The deferred call is not a single bound-method call."""


class MissingTestName(DumpError):
    """No test name was given and none could be found."""


def _unwrap(call: Callable[[], Any]) -> Any:
    target = call
    while isinstance(target, functools.partial):
        target = target.func
    return target


def _current_test_name() -> str | None:
    # e.g. "tests/test_widgets.py::TestWidgets::test_returns_widget (call)"
    current = os.environ.get("PYTEST_CURRENT_TEST")
    if not current:
        return None
    return current.rsplit(" ", 1)[0].split("::")[-1]


def describe_call(
    call: Callable[[], Any], test_name: str | None = None
) -> CallDescriptor:
    """Work out which controller method a deferred call targets.

    Args:
        call: A bound controller method, optionally wrapped in
            functools.partial to carry its arguments
        test_name: Name of the test making the call. Defaults to the
            test pytest is currently running.

    Returns:
        CallDescriptor for the call

    Raises:
        InvalidCallShape: If the call is not a bound method
        NotAController: If the declaring class name lacks the suffix
        MissingTestName: If no test name is available
    """
    target = _unwrap(call)
    if not inspect.ismethod(target):
        raise InvalidCallShape(f"Expected a bound controller method, got {target!r}")

    qualname = target.__func__.__qualname__.split(".")
    if len(qualname) < 2 or qualname[-2] == "<locals>":
        raise InvalidCallShape(f"Cannot find the declaring class of {target!r}")

    controller_name = qualname[-2]
    controller_prefix(controller_name)

    if test_name is None:
        test_name = _current_test_name()
    if not test_name:
        raise MissingTestName(
            f"No test name given for {controller_name}.{target.__name__}"
        )

    return CallDescriptor(
        controller_name=controller_name,
        method_name=target.__name__,
        test_name=test_name,
    )


def execute_call(call: Callable[[], Any]) -> CallOutcome:
    """Run a deferred call, capturing HTTPException as a failure outcome.

    Any other exception propagates.
    """
    try:
        return Success(call())
    except HTTPException as e:
        logger.info(f"Call failed with HTTP {e.status_code}")
        return Failure(e)


def analyze_call(
    call: Callable[[], Any], test_name: str | None = None
) -> tuple[CallDescriptor, CallOutcome]:
    """Describe a deferred call, then execute it.

    The call is only executed once its shape has been validated.
    """
    descriptor = describe_call(call, test_name)
    logger.info(
        f"Calling {descriptor.controller_name}.{descriptor.method_name} "
        f"for {descriptor.test_name}"
    )
    return descriptor, execute_call(call)


def response_content(response: Response) -> Any:
    """Extract the content a response carries.

    JSON bodies are decoded back into data, anything else is returned as text.
    """
    if isinstance(response, StreamingResponse):
        raise TypeError("Streaming responses have no recorded body")
    if not isinstance(response, Response):
        raise TypeError(f"Expected a Response, got {type(response).__name__}")
    if "json" in (response.media_type or ""):
        return json.loads(response.body)
    return response.body.decode(response.charset)
