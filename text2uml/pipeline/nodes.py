"""
Nodes of the text-to-UML workflows.
"""

from typing import Any, Dict

from text2uml.core.design_generator import DesignGenerator
from text2uml.core.extractor import extract_json, extract_plantuml
from text2uml.core.generator import generate
from text2uml.core.logger import Logger
from text2uml.core.models import NodeNames, PipelineState
from text2uml.core.parser import parse
from text2uml.core.plantuml import PlantUMLTool


class PipelineNodes:
    """
    Collection of nodes for the text-to-UML workflows.

    Each method takes the PipelineState and returns a dict with state
    updates. Pipeline errors are not caught here: they end the run and
    propagate out of the compiled workflow's invoke().
    """

    def __init__(self, design_generator: DesignGenerator, plantuml_tool: PlantUMLTool):
        """
        Initialize nodes with required collaborators.

        Args:
            design_generator: Remote text generation
            plantuml_tool: Rendering backend
        """
        self.design_generator = design_generator
        self.plantuml_tool = plantuml_tool

    def generate_design(self, state: PipelineState) -> Dict[str, Any]:
        Logger.log_info(f"--- NODE: {NodeNames.GENERATE_DESIGN.upper()} ---")
        raw_output = self.design_generator.generate_design_text(state["requirements"])
        return {"raw_output": raw_output}

    def extract_payload(self, state: PipelineState) -> Dict[str, Any]:
        Logger.log_info(f"--- NODE: {NodeNames.EXTRACT_PAYLOAD.upper()} ---")
        return {"payload": extract_json(state["raw_output"])}

    def parse_model(self, state: PipelineState) -> Dict[str, Any]:
        Logger.log_info(f"--- NODE: {NodeNames.PARSE_MODEL.upper()} ---")
        model = parse(state["payload"])
        Logger.log_model(model)
        Logger.log_unresolved(model.unresolved_endpoints())
        return {"diagram_model": model}

    def generate_code(self, state: PipelineState) -> Dict[str, Any]:
        Logger.log_info(f"--- NODE: {NodeNames.GENERATE_CODE.upper()} ---")
        return {"plantuml": generate(state["diagram_model"])}

    def generate_plantuml(self, state: PipelineState) -> Dict[str, Any]:
        Logger.log_info(f"--- NODE: {NodeNames.GENERATE_PLANTUML.upper()} ---")
        raw_output = self.design_generator.generate_plantuml_text(state["requirements"])
        return {"raw_output": raw_output}

    def extract_plantuml(self, state: PipelineState) -> Dict[str, Any]:
        Logger.log_info(f"--- NODE: {NodeNames.EXTRACT_PLANTUML.upper()} ---")
        return {"plantuml": extract_plantuml(state["raw_output"])}

    def render_image(self, state: PipelineState) -> Dict[str, Any]:
        """
        Render the current diagram to PNG.

        Args:
            state: Current workflow state

        Returns:
            Dict with 'image' and 'image_url' updates
        """
        Logger.log_info(f"--- NODE: {NodeNames.RENDER_IMAGE.upper()} ---")
        plantuml = state["plantuml"]
        image = self.plantuml_tool.render_png(plantuml)
        return {
            "image": image,
            "image_url": self.plantuml_tool.get_diagram_url(plantuml),
        }
