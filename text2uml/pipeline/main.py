from pathlib import Path
from typing import Optional

from text2uml.config import create_run_dir
from text2uml.core.errors import DiagramPipelineError
from text2uml.core.logger import Logger
from text2uml.core.model_manager import ModelManager
from text2uml.core.models import PipelineMode
from text2uml.core.plantuml import PlantUMLTool
from text2uml.core.requirements_doc import RequirementsDocumentWriter
from text2uml.core.utils import initialize_pipeline, run_pipeline
from text2uml.pipeline.config import SystemConfig


def write_document(config: SystemConfig, text: str, run_dir: Path) -> Path:
    writer = RequirementsDocumentWriter(ModelManager(config))
    document = writer.generate(text)

    document_file = run_dir / "requirements.md"
    with open(document_file, 'w', encoding='utf-8') as f:
        f.write(document + "\n")
    return document_file


def write_diagram(config: SystemConfig, mode: str, text: str, run_name: str, run_dir: Path, check: bool) -> Path:
    app = initialize_pipeline(cfg=config, mode=mode)
    final_output = run_pipeline(app, text, run_name)

    diagram = final_output["plantuml"]
    diagram_file = run_dir / "diagram.puml"
    with open(diagram_file, 'w', encoding='utf-8') as f:
        f.write(diagram + "\n")

    if final_output.get("image"):
        with open(run_dir / "diagram.png", 'wb') as f:
            f.write(final_output["image"])

    puml_tool = PlantUMLTool(config.plantuml_host, timeout=config.request_timeout)
    Logger.log_diagram(final_output.get("image_url") or puml_tool.get_diagram_url(diagram), diagram)

    if check:
        result = puml_tool.check_syntax(diagram)
        if result.is_valid:
            Logger.log_info(f"Syntax valid. View at: {result.url}")
        else:
            Logger.log_warning(f"Syntax error: {result.error}")

    return diagram_file


def main(api_key: str, mode: str, text: str, run_name: str = "input", render: bool = False, check: bool = False) -> Optional[Path]:
    """
    Run one generation and save its output.

    Args:
        api_key: API key for the language model
        mode: PipelineMode value
        text: Free-form design description
        run_name: Name used in logs
        render: Render the diagram to PNG
        check: Validate the diagram against the PlantUML server

    Returns:
        Path of the written file, or None if the run failed
    """
    config = SystemConfig(
        api_key=api_key,
        render_image=render,
    )
    run_dir = create_run_dir(mode)

    try:
        if mode == PipelineMode.DOCUMENT:
            output_file = write_document(config, text, run_dir)
        else:
            output_file = write_diagram(config, mode, text, run_name, run_dir, check)
    except DiagramPipelineError as e:
        Logger.log_error(f"{type(e).__name__}: {e}")
        return None

    Logger.log_info(f"Saved output to {output_file}")
    return output_file
