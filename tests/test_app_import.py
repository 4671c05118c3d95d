import importlib

import pytest

from core.interaction import InteractionController


class _FakeColumn:
    def __init__(self, buttons: dict) -> None:
        self._buttons = buttons

    def button(self, label, on_click=None, args=(), disabled=False):
        self._buttons[label] = {"on_click": on_click, "args": args, "disabled": disabled}
        return False

    def caption(self, text):
        self._buttons["caption"] = text


@pytest.fixture()
def app_main(monkeypatch):
    import streamlit as st

    monkeypatch.setattr(st, "session_state", {}, raising=False)
    return importlib.import_module("app.main")


def test_app_package_exports_main():
    module = importlib.import_module("app")

    assert hasattr(module, "main"), "app package should expose main entrypoint"


def test_app_controller_is_created_once(app_main):
    controller = app_main._controller(40)
    assert isinstance(controller, InteractionController)
    assert app_main._controller(40) is controller

    app_main._controller(60)
    assert controller.total_length == 60
    assert controller.visible_range.end == 60


def _render(app_main, monkeypatch, controller) -> dict:
    import streamlit as st

    buttons: dict = {}
    monkeypatch.setattr(st, "columns", lambda count: [_FakeColumn(buttons) for _ in range(count)])
    app_main._render_window_controls(controller)
    return buttons


def _click(buttons: dict, label: str) -> None:
    entry = buttons[label]
    entry["on_click"](*entry["args"])


def test_window_buttons_reflect_state_after_click(app_main, monkeypatch):
    controller = app_main._controller(100)

    buttons = _render(app_main, monkeypatch, controller)
    assert buttons["Zoom out"]["disabled"]
    assert buttons["← Earlier"]["disabled"]

    _click(buttons, "Zoom in")
    buttons = _render(app_main, monkeypatch, controller)
    assert not buttons["Zoom out"]["disabled"]
    assert not buttons["Later →"]["disabled"]

    _click(buttons, "Later →")
    buttons = _render(app_main, monkeypatch, controller)
    assert controller.window.pan_offset == 5
    assert not buttons["← Earlier"]["disabled"]
