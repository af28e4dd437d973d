"""Dump controller results from unit tests into client-side test data."""

from api_response_dumper.call_analyzer import (
    InvalidCallShape,
    MissingTestName,
    NotAController,
    analyze_call,
    describe_call,
    execute_call,
    response_content,
)
from api_response_dumper.fragment_store import FragmentStore, render_fragment
from api_response_dumper.models import (
    CallDescriptor,
    CallOutcome,
    DumpError,
    Failure,
    RecordedCall,
    Success,
)
from api_response_dumper.serializer import (
    escape_js_string,
    escape_single_quotes,
    to_json,
)
from api_response_dumper.session import DumpSession

__all__ = [
    # Models
    "CallDescriptor",
    "CallOutcome",
    "Success",
    "Failure",
    "RecordedCall",
    # Errors
    "DumpError",
    "InvalidCallShape",
    "NotAController",
    "MissingTestName",
    # Call analysis
    "describe_call",
    "execute_call",
    "analyze_call",
    "response_content",
    # Serialization
    "to_json",
    "escape_single_quotes",
    "escape_js_string",
    # Fragments
    "FragmentStore",
    "render_fragment",
    "DumpSession",
]
