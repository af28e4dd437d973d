"""Dump session tying call analysis to the fragment store for one test run."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from api_response_dumper.call_analyzer import analyze_call, response_content
from api_response_dumper.fragment_store import FragmentStore
from api_response_dumper.models import RecordedCall, Success

logger = logging.getLogger(__name__)


@dataclass
class DumpSession:
    """Records controller calls for one test run.

    The fragment directory is reset once when the session starts and the
    master file is built when it finishes.

    Usage:
        with DumpSession(FragmentStore(root)) as session:
            session.record(partial(controller.get_by_id, 5), "test_get")
    """

    store: FragmentStore

    _started: bool = field(default=False, init=False, repr=False)
    _recorded: list[RecordedCall] = field(default_factory=list, init=False, repr=False)

    def __enter__(self) -> "DumpSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            logger.warning(f"Dump session aborted by {exc_type.__name__}, master file not built")
            return
        self.finish()

    def start(self) -> None:
        """Clear fragments from earlier runs. Only the first call has an effect."""
        if self._started:
            return
        logger.info(f"Starting dump session in {self.store.root}")
        self.store.reset_fragments()
        self._started = True

    def finish(self) -> Path:
        """Build the master file from every fragment on disk."""
        logger.info(f"Finishing dump session with {len(self._recorded)} recorded calls")
        return self.store.build_master_file()

    def record(
        self, call: Callable[[], Any], test_name: str | None = None
    ) -> RecordedCall:
        """Record a controller method that returns an entity.

        On success the returned entity is serialized, on HTTPException the
        exception detail is.
        """
        descriptor, outcome = analyze_call(call, test_name)
        value = outcome.value if isinstance(outcome, Success) else outcome.payload
        return self._save(RecordedCall(descriptor, outcome, value))

    def record_response(
        self, call: Callable[[], Any], test_name: str | None = None
    ) -> RecordedCall:
        """Record a controller method that returns a Response.

        On success the response content is serialized, on HTTPException the
        exception detail is.
        """
        descriptor, outcome = analyze_call(call, test_name)
        if isinstance(outcome, Success):
            value = response_content(outcome.value)
        else:
            value = outcome.payload
        return self._save(RecordedCall(descriptor, outcome, value))

    def _save(self, recorded: RecordedCall) -> RecordedCall:
        descriptor = recorded.descriptor
        self.store.record_fragment(
            descriptor.controller_name,
            descriptor.method_name,
            descriptor.test_name,
            recorded.value,
        )
        self._recorded.append(recorded)
        return recorded

    def get_recorded_calls(self) -> list[RecordedCall]:
        return list(self._recorded)
