"""pytest plugin exposing the api_response_dump fixture.

Enable it from a conftest.py:

    pytest_plugins = ["api_response_dumper.plugin"]
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from api_response_dumper.fragment_store import DEFAULT_ROOT, FragmentStore
from api_response_dumper.models import RecordedCall
from api_response_dumper.session import DumpSession

logger = logging.getLogger(__name__)


def pytest_addoption(parser):
    group = parser.getgroup("api-response-dump")
    group.addoption(
        "--api-response-dump-root",
        action="store",
        default=None,
        help=f"Directory for fragment and master files (default: <rootdir>/{DEFAULT_ROOT})",
    )
    parser.addini(
        "api_response_dump_root",
        help="Directory for fragment and master files, relative to rootdir",
    )


def resolve_root(config: pytest.Config) -> Path:
    """Dump root from the command line, then the ini file, then the default."""
    root = config.getoption("api_response_dump_root") or config.getini(
        "api_response_dump_root"
    )
    path = Path(root) if root else Path(DEFAULT_ROOT)
    if not path.is_absolute():
        path = config.rootpath / path
    return path


class ResponseRecorder:
    """Records controller calls on behalf of a single test."""

    def __init__(self, session: DumpSession, test_name: str):
        self.session = session
        self.test_name = test_name

    def record(self, call: Callable[[], Any]) -> RecordedCall:
        return self.session.record(call, self.test_name)

    def record_response(self, call: Callable[[], Any]) -> RecordedCall:
        return self.session.record_response(call, self.test_name)


@pytest.fixture(scope="session")
def api_response_dump_session(request):
    """One dump session per test run; builds the master file at the end."""
    root = resolve_root(request.config)
    logger.info(f"Dumping controller responses to {root}")
    with DumpSession(FragmentStore(root)) as session:
        yield session


@pytest.fixture
def api_response_dump(api_response_dump_session, request) -> ResponseRecorder:
    """Recorder bound to the requesting test's name."""
    return ResponseRecorder(api_response_dump_session, request.node.name)
