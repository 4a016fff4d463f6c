"""
Workflow creation for the text-to-UML pipeline.
"""

from typing import Any
from langgraph.graph import StateGraph, START, END

from text2uml.pipeline.config import SystemConfig
from text2uml.pipeline.nodes import PipelineNodes
from text2uml.core.models import NodeNames, PipelineState

from text2uml.core.logger import Logger


def _finish(workflow: StateGraph, last_node: str, cfg: SystemConfig) -> None:
    if cfg.render_image:
        workflow.add_edge(last_node, NodeNames.RENDER_IMAGE)
        workflow.add_edge(NodeNames.RENDER_IMAGE, END)
    else:
        workflow.add_edge(last_node, END)


def create_structured_workflow(nodes: PipelineNodes, cfg: SystemConfig) -> Any:
    """
    Create the workflow that goes through the DiagramModel.

    generate_design -> extract_payload -> parse_model -> generate_code
    [-> render_image]

    Args:
        nodes: PipelineNodes instance with all node methods
        cfg: SystemConfig instance

    Returns:
        Compiled LangGraph workflow
    """
    Logger.log_info("Creating structured diagram workflow")

    workflow = StateGraph(PipelineState)

    workflow.add_node(NodeNames.GENERATE_DESIGN, nodes.generate_design)
    workflow.add_node(NodeNames.EXTRACT_PAYLOAD, nodes.extract_payload)
    workflow.add_node(NodeNames.PARSE_MODEL, nodes.parse_model)
    workflow.add_node(NodeNames.GENERATE_CODE, nodes.generate_code)
    if cfg.render_image:
        workflow.add_node(NodeNames.RENDER_IMAGE, nodes.render_image)

    workflow.add_edge(START, NodeNames.GENERATE_DESIGN)
    workflow.add_edge(NodeNames.GENERATE_DESIGN, NodeNames.EXTRACT_PAYLOAD)
    workflow.add_edge(NodeNames.EXTRACT_PAYLOAD, NodeNames.PARSE_MODEL)
    workflow.add_edge(NodeNames.PARSE_MODEL, NodeNames.GENERATE_CODE)
    _finish(workflow, NodeNames.GENERATE_CODE, cfg)

    return workflow.compile()


def create_direct_workflow(nodes: PipelineNodes, cfg: SystemConfig) -> Any:
    """
    Create the workflow for models that answer with PlantUML directly.

    generate_plantuml -> extract_plantuml [-> render_image]
    """
    Logger.log_info("Creating direct diagram workflow")

    workflow = StateGraph(PipelineState)

    workflow.add_node(NodeNames.GENERATE_PLANTUML, nodes.generate_plantuml)
    workflow.add_node(NodeNames.EXTRACT_PLANTUML, nodes.extract_plantuml)
    if cfg.render_image:
        workflow.add_node(NodeNames.RENDER_IMAGE, nodes.render_image)

    workflow.add_edge(START, NodeNames.GENERATE_PLANTUML)
    workflow.add_edge(NodeNames.GENERATE_PLANTUML, NodeNames.EXTRACT_PLANTUML)
    _finish(workflow, NodeNames.EXTRACT_PLANTUML, cfg)

    return workflow.compile()
