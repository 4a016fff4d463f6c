"""
Configuration management for the text-to-UML pipeline.
"""

from os import getenv

from pydantic import BaseModel, Field

import text2uml.config as cfg


class SystemConfig(BaseModel):
    """System configuration, passed explicitly to every collaborator."""
    openrouter_base_url: str = Field(
        default=cfg.OPENROUTER_BASE_URL,
        description="Base URL for OpenAI-compatible API"
    )
    api_key: str = Field(
        default_factory=lambda: getenv("OPENROUTER_API_KEY", ""),
        description="API key for the OpenAI-compatible API"
    )
    design_model: str = Field(
        default=cfg.DESIGN_MODEL,
        description="Model for design extraction and direct diagram writing"
    )
    document_model: str = Field(
        default=cfg.DOCUMENT_MODEL,
        description="Model for requirements document writing"
    )
    plantuml_host: str = Field(
        default=cfg.PLANTUML_HOST,
        description="PlantUML server host"
    )
    max_tokens_design: int = Field(
        default=cfg.MAX_TOKENS_DESIGN,
        ge=1,
        description="Max tokens for design step"
    )
    max_tokens_document: int = Field(
        default=cfg.MAX_TOKENS_DOCUMENT,
        ge=1,
        description="Max tokens for document step"
    )
    temperature_design: float = Field(
        default=cfg.TEMPERATURE_DESIGN,
        ge=0.0,
        le=2.0,
        description="Temperature for design model"
    )
    temperature_document: float = Field(
        default=cfg.TEMPERATURE_DOCUMENT,
        ge=0.0,
        le=2.0,
        description="Temperature for document model"
    )
    render_image: bool = Field(
        default=False,
        description="Render the generated diagram to PNG"
    )
    request_timeout: int = Field(
        default=cfg.REQUEST_TIMEOUT,
        ge=1,
        description="Timeout for PlantUML server requests"
    )
    llm_timeout: int = Field(
        default=cfg.LLM_TIMEOUT,
        ge=1,
        description="Timeout for LLM operations"
    )
