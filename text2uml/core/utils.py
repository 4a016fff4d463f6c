"""
Utility functions for the text-to-UML pipeline.
"""

import os

from typing import Any

from text2uml.pipeline.config import SystemConfig
from text2uml.pipeline.nodes import PipelineNodes
from text2uml.pipeline.workflow import create_direct_workflow, create_structured_workflow
from text2uml.core.design_generator import DesignGenerator
from text2uml.core.model_manager import ModelManager
from text2uml.core.models import PipelineMode, PipelineState
from text2uml.core.plantuml import PlantUMLTool
from text2uml.core.logger import Logger


def load_input_text(path: str) -> str:
    """
    Load the design description from a text file.

    Args:
        path: Path to a UTF-8 text file

    Returns:
        File contents

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    Logger.log_info(f"Loading input text from {path}")

    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def initialize_pipeline(
    cfg: SystemConfig,
    mode: str = PipelineMode.STRUCTURED,
    model_manager: ModelManager = None,
) -> Any:
    """
    Initialize all pipeline components.

    Args:
        cfg: System configuration
        mode: PipelineMode.STRUCTURED or PipelineMode.DIRECT
        model_manager: Optional prebuilt model manager

    Returns:
        Compiled workflow
    """
    Logger.log_title("INITIALIZING TEXT-TO-UML PIPELINE")

    try:
        Logger.log_models(cfg.design_model)
        model_mgr = model_manager or ModelManager(cfg)

        Logger.log_info("Initializing PlantUML tool...")
        puml_tool = PlantUMLTool(cfg.plantuml_host, timeout=cfg.request_timeout)

        nodes = PipelineNodes(DesignGenerator(model_mgr), puml_tool)

        Logger.log_info("Building LangGraph workflow...")
        if mode == PipelineMode.DIRECT:
            app = create_direct_workflow(nodes, cfg)
        elif mode == PipelineMode.STRUCTURED:
            app = create_structured_workflow(nodes, cfg)
        else:
            raise ValueError(f"Unknown pipeline mode: {mode}")

        Logger.log_title("PIPELINE INITIALIZATION COMPLETE")

        return app

    except Exception as e:
        Logger.log_error(f"Pipeline initialization failed: {e}")
        raise


def create_initial_state(requirements: str) -> PipelineState:
    """
    Create an initial state for the workflow.

    Args:
        requirements: Free-form design description

    Returns:
        Initial PipelineState dictionary
    """
    return {
        "requirements": requirements,
    }


def run_pipeline(
    app: Any,
    requirements: str,
    run_name: str,
) -> PipelineState:
    """
    Run the workflow on one design description.

    Args:
        app: Compiled LangGraph workflow
        requirements: Free-form design description
        run_name: Name for logging purposes

    Returns:
        Final workflow state
    """
    Logger.log_run_start(run_name, requirements)

    try:
        final_output = app.invoke(create_initial_state(requirements))
        Logger.log_run_output(final_output)
        return final_output
    except Exception as e:
        Logger.log_error(f"Workflow execution failed: {type(e).__name__}: {e}")
        raise
