from types import SimpleNamespace

import pytest
import requests

from text2uml.core import plantuml as plantuml_module
from text2uml.core.errors import LayoutEngineMissingError, RenderError
from text2uml.core.plantuml import PlantUMLTool

HOST = "http://plantuml.test"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


def fake_server(monkeypatch, png_status=200, png_content=PNG_BYTES, txt=""):
    calls = []

    def fake_get(url, timeout):
        calls.append(url)
        if "/png/" in url:
            return SimpleNamespace(status_code=png_status, content=png_content, text="")
        return SimpleNamespace(status_code=200, content=txt.encode(), text=txt)

    monkeypatch.setattr(plantuml_module.requests, "get", fake_get)
    return calls


def test_encoding_adds_missing_sentinels():
    tool = PlantUMLTool(HOST)
    assert tool._encode_plantuml("A --> B") == tool._encode_plantuml("@startuml\nA --> B\n@enduml")


def test_diagram_url():
    tool = PlantUMLTool(HOST + "/")
    url = tool.get_diagram_url("@startuml\nclass A\n@enduml", "svg")
    assert url.startswith(f"{HOST}/svg/")


def test_render_png_returns_image(monkeypatch):
    calls = fake_server(monkeypatch)
    image = PlantUMLTool(HOST).render_png("@startuml\nclass A\n@enduml")

    assert image == PNG_BYTES
    assert len(calls) == 1


def test_render_error_carries_server_message(monkeypatch):
    calls = fake_server(monkeypatch, png_status=400, txt="Syntax Error? (line 2)")

    with pytest.raises(RenderError) as exc_info:
        PlantUMLTool(HOST).render_png("@startuml\nclass {\n@enduml")

    assert not isinstance(exc_info.value, LayoutEngineMissingError)
    assert "Syntax Error? (line 2)" in str(exc_info.value)
    assert "/txt/" in calls[1]


def test_missing_graphviz_is_reported(monkeypatch):
    fake_server(
        monkeypatch,
        png_status=200,
        png_content=b"<svg/>",
        txt="Dot executable: /usr/bin/dot\nDot executable does not exist\nCannot find Graphviz.",
    )

    with pytest.raises(LayoutEngineMissingError):
        PlantUMLTool(HOST).render_png("@startuml\nA --> B\n@enduml")


def test_connection_error_is_render_error(monkeypatch):
    def refuse(url, timeout):
        raise requests.exceptions.ConnectionError("connection refused")

    monkeypatch.setattr(plantuml_module.requests, "get", refuse)

    with pytest.raises(RenderError) as exc_info:
        PlantUMLTool(HOST).render_png("@startuml\n@enduml")
    assert "connection refused" in str(exc_info.value)


def test_check_syntax(monkeypatch):
    fake_server(monkeypatch)
    result = PlantUMLTool(HOST).check_syntax("@startuml\nclass A\n@enduml")

    assert result.is_valid
    assert result.url.startswith(f"{HOST}/png/")
    assert result.svg_url.startswith(f"{HOST}/svg/")


def test_check_syntax_reports_errors(monkeypatch):
    fake_server(monkeypatch, png_status=400, txt="Syntax Error?")
    result = PlantUMLTool(HOST).check_syntax("@startuml\nclass {\n@enduml")

    assert not result.is_valid
    assert "Syntax Error?" in result.error
