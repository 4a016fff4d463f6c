import json
from types import SimpleNamespace

import pytest
from langchain_core.messages import AIMessage

from text2uml.core import plantuml as plantuml_module
from text2uml.core.design_generator import DesignGenerator
from text2uml.core.errors import NoRecognizedBlockError, UnknownRelationshipTypeError, UpstreamError
from text2uml.core.models import PipelineMode, TaskType
from text2uml.core.utils import create_initial_state, initialize_pipeline, run_pipeline
from text2uml.pipeline.config import SystemConfig

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"

DESIGN_ANSWER = """Here is the design you asked for:
```json
{
  "classes": [
    {"name": "House", "attributes": [{"visibility": "private", "name": "address"}]},
    {"name": "Room"}
  ],
  "relationships": [
    {"type": "Composition", "container": "House", "part": "Room", "multiplicityPart": "1..*"}
  ]
}
```
Hope this helps."""


class FakeLLM:
    def __init__(self, answer):
        self.answer = answer
        self.messages = None

    def invoke(self, messages):
        self.messages = messages
        if isinstance(self.answer, Exception):
            raise self.answer
        return AIMessage(content=self.answer)


class FakeModelManager:
    def __init__(self, answer):
        self.llm = FakeLLM(answer)
        self.tasks = []

    def get_model(self, task_type, **override_kwargs):
        self.tasks.append(task_type)
        return self.llm


def build(answer, mode=PipelineMode.STRUCTURED, render=False):
    manager = FakeModelManager(answer)
    cfg = SystemConfig(api_key="test-key", plantuml_host="http://plantuml.test", render_image=render)
    return initialize_pipeline(cfg, mode=mode, model_manager=manager), manager


def test_structured_pipeline():
    app, manager = build(DESIGN_ANSWER)
    final_output = run_pipeline(app, "A house is made of rooms.", "house")

    assert manager.tasks == [TaskType.DESIGN]
    assert final_output["diagram_model"].class_names() == ("House", "Room")
    lines = final_output["plantuml"].splitlines()
    assert lines[0] == "@startuml"
    assert "  - address : String" in lines
    assert 'House *-- "1..*" Room' in lines
    assert lines[-1] == "@enduml"
    assert final_output.get("image") is None


def test_structured_pipeline_renders_when_asked(monkeypatch):
    def fake_get(url, timeout):
        return SimpleNamespace(status_code=200, content=PNG_BYTES, text="")

    monkeypatch.setattr(plantuml_module.requests, "get", fake_get)
    app, _ = build(DESIGN_ANSWER, render=True)
    final_output = run_pipeline(app, "A house is made of rooms.", "house")

    assert final_output["image"] == PNG_BYTES
    assert final_output["image_url"].startswith("http://plantuml.test/png/")


def test_direct_pipeline():
    answer = "Sure.\n```plantuml\n@startuml\nclass A\nA --> B\n@enduml\n```"
    app, manager = build(answer, mode=PipelineMode.DIRECT)
    final_output = app.invoke(create_initial_state("A uses B."))

    assert manager.tasks == [TaskType.DIAGRAM]
    assert final_output["plantuml"] == "@startuml\nclass A\nA --> B\n@enduml"


def test_parse_errors_end_the_run():
    answer = json.dumps({
        "classes": [{"name": "Moon"}, {"name": "Earth"}],
        "relationships": [{"type": "Orbits", "source": "Moon", "target": "Earth"}],
    })
    app, _ = build(answer)

    with pytest.raises(UnknownRelationshipTypeError):
        run_pipeline(app, "The moon orbits the earth.", "moon")


def test_direct_pipeline_without_block():
    app, _ = build("I am not able to draw diagrams.", mode=PipelineMode.DIRECT)

    with pytest.raises(NoRecognizedBlockError):
        app.invoke(create_initial_state("Anything."))


def test_upstream_failure_is_reported():
    app, _ = build(ConnectionError("service down"))

    with pytest.raises(UpstreamError) as exc_info:
        app.invoke(create_initial_state("Anything."))
    assert "service down" in str(exc_info.value)


def test_unknown_mode():
    with pytest.raises(ValueError):
        initialize_pipeline(SystemConfig(api_key="k"), mode="sketch", model_manager=FakeModelManager(""))


def test_design_generator_sends_input_text():
    manager = FakeModelManager(DESIGN_ANSWER)
    raw = DesignGenerator(manager).generate_design_text("A library lends books.")

    assert raw == DESIGN_ANSWER
    system_message, human_message = manager.llm.messages
    assert '"relationships"' in system_message.content
    assert "A library lends books." in human_message.content


def test_design_generator_rejects_blank_input():
    with pytest.raises(UpstreamError):
        DesignGenerator(FakeModelManager(DESIGN_ANSWER)).generate_design_text("  ")


def test_empty_model_answer_is_upstream_error():
    with pytest.raises(UpstreamError):
        DesignGenerator(FakeModelManager("   ")).generate_design_text("A library lends books.")
