"""
Requirements specification writer.
"""

import re

from langchain_core.messages import HumanMessage, SystemMessage

from text2uml.core.errors import UpstreamError
from text2uml.core.invoke import invoke_text
from text2uml.core.logger import Logger
from text2uml.core.model_manager import ModelManager
from text2uml.core.models import TaskType
from text2uml.core.prompts import REQUIREMENTS_DOCUMENT_SYSTEM

MARKDOWN_FENCE = re.compile(r"```[ \t]*(?:markdown|md)?", re.IGNORECASE)


def clean_markdown(raw_document: str) -> str:
    """Remove ```markdown / ``` fences the model added despite instructions."""
    return MARKDOWN_FENCE.sub("", raw_document).strip()


class RequirementsDocumentWriter:
    """Turns a project description into a Markdown requirements specification."""

    def __init__(self, model_manager: ModelManager):
        self.model_manager = model_manager

    def generate(self, requirements: str) -> str:
        """
        Generate the requirements document.

        Args:
            requirements: Free-form project description

        Returns:
            Markdown document without code fences

        Raises:
            UpstreamError: If the model call fails or the document is empty
        """
        if not requirements or not requirements.strip():
            raise UpstreamError("No input text provided for the requirements document")

        Logger.log_info("Generating requirements document")
        messages = [
            SystemMessage(content=REQUIREMENTS_DOCUMENT_SYSTEM),
            HumanMessage(content=f"""
            # PROJECT DESCRIPTION
            {requirements}
            """)
        ]

        llm = self.model_manager.get_model(TaskType.DOCUMENT)
        document = clean_markdown(invoke_text(llm, messages))
        if not document:
            raise UpstreamError("Requirements document is empty after cleanup")

        Logger.log_info(f"Requirements document generated ({len(document.splitlines())} lines)")
        return document
