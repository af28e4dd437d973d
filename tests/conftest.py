"""Shared fixtures: sample controllers and a dump root per test."""

from dataclasses import dataclass

import pytest
from fastapi import HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse

from api_response_dumper.fragment_store import FragmentStore

pytest_plugins = ["pytester"]


@dataclass
class Widget:
    id: int
    name: str


class WidgetController:
    def __init__(self):
        self.widgets = {5: Widget(id=5, name="x")}

    def get_by_id(self, widget_id: int) -> Widget:
        if widget_id not in self.widgets:
            raise HTTPException(status_code=404, detail={"error": "not found"})
        return self.widgets[widget_id]

    def get_response(self, widget_id: int) -> JSONResponse:
        widget = self.get_by_id(widget_id)
        return JSONResponse({"widget_id": widget.id, "display_name": widget.name})

    def get_banner(self) -> PlainTextResponse:
        return PlainTextResponse("hello")

    def explode(self):
        raise RuntimeError("boom")


class AdminWidgetController(WidgetController):
    def list_all(self) -> list[Widget]:
        return list(self.widgets.values())


class WidgetService:
    def get_by_id(self, widget_id: int) -> Widget:
        return Widget(id=widget_id, name="service")


@pytest.fixture
def widget_controller():
    return WidgetController()


@pytest.fixture
def admin_controller():
    return AdminWidgetController()


@pytest.fixture
def widget_service():
    return WidgetService()


@pytest.fixture
def store(tmp_path):
    return FragmentStore(tmp_path / "api-response-dump")
