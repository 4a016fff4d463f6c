from langchain_core.messages import HumanMessage, SystemMessage

from text2uml.core.errors import UpstreamError
from text2uml.core.invoke import invoke_text
from text2uml.core.logger import Logger
from text2uml.core.model_manager import ModelManager
from text2uml.core.models import TaskType
from text2uml.core.prompts import DESIGN_EXTRACTOR_SYSTEM, PLANTUML_WRITER_SYSTEM


class DesignGenerator:
    """
    Remote text generation for the diagram pipeline.

    The answers are untrusted raw text; callers pass them through the
    extractor before using them.
    """

    def __init__(self, model_manager: ModelManager):
        self.model_manager = model_manager

    def _ask(self, task_type: TaskType, system_prompt: str, source_text: str) -> str:
        if not source_text or not source_text.strip():
            raise UpstreamError("No input text provided for generation")

        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=f"""
            # INPUT TEXT
            ---
            {source_text}
            ---
            """)
        ]
        Logger.log_debug(f"{task_type.value} prompt messages: {messages}")

        llm = self.model_manager.get_model(task_type)
        return invoke_text(llm, messages)

    def generate_design_text(self, source_text: str) -> str:
        """Ask the model for a JSON design payload describing the text."""
        Logger.log_info("Requesting design payload from the model")
        return self._ask(TaskType.DESIGN, DESIGN_EXTRACTOR_SYSTEM, source_text)

    def generate_plantuml_text(self, source_text: str) -> str:
        """Ask the model for PlantUML source directly."""
        Logger.log_info("Requesting PlantUML diagram from the model")
        return self._ask(TaskType.DIAGRAM, PLANTUML_WRITER_SYSTEM, source_text)
