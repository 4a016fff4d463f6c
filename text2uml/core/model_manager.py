"""
Chat model selection for the design, diagram and document tasks.
"""

from typing import Any, Dict, Optional
from langchain_openai import ChatOpenAI
from pydantic import BaseModel, ConfigDict

from text2uml.core.models import TaskType
from text2uml.core.logger import Logger
from text2uml.pipeline.config import SystemConfig


class ModelSpec(BaseModel):
    """Model name and sampling settings for one task."""
    model_config = ConfigDict(frozen=True)

    name: str
    temperature: float
    max_tokens: Optional[int] = None


def specs_from_config(cfg: SystemConfig) -> Dict[TaskType, ModelSpec]:
    """Design and direct diagram writing share a model; documents get their own."""
    design = ModelSpec(
        name=cfg.design_model,
        temperature=cfg.temperature_design,
        max_tokens=cfg.max_tokens_design,
    )
    document = ModelSpec(
        name=cfg.document_model,
        temperature=cfg.temperature_document,
        max_tokens=cfg.max_tokens_document,
    )
    return {
        TaskType.DESIGN: design,
        TaskType.DIAGRAM: design,
        TaskType.DOCUMENT: document,
    }


class ModelManager:
    """
    Hands out ChatOpenAI clients per task type.

    Endpoint, credentials and timeout come from the SystemConfig and are the
    same for every task.
    """

    def __init__(self, cfg: SystemConfig, specs: Optional[Dict[TaskType, ModelSpec]] = None):
        self.cfg = cfg
        self.specs = specs if specs is not None else specs_from_config(cfg)

        for task, spec in self.specs.items():
            Logger.log_debug(f"Model for {task.value}: {spec.name} (temp={spec.temperature})")

    def get_spec(self, task_type: TaskType) -> ModelSpec:
        spec = self.specs.get(task_type)
        if spec is None:
            raise ValueError(f"No model configured for task {task_type.value}")
        return spec

    def get_model(self, task_type: TaskType, **override_kwargs: Any) -> ChatOpenAI:
        """
        Build the chat client for a task.

        Transport retries stay off: a failed call is reported, not repeated.
        """
        spec = self.get_spec(task_type)

        model_kwargs = {
            "model_name": spec.name,
            "temperature": spec.temperature,
            "api_key": self.cfg.api_key,
            "base_url": self.cfg.openrouter_base_url,
            "timeout": self.cfg.llm_timeout,
            "max_retries": 0,
        }
        if spec.max_tokens:
            model_kwargs["max_tokens"] = spec.max_tokens

        model_kwargs.update(override_kwargs)

        return ChatOpenAI(**model_kwargs)
