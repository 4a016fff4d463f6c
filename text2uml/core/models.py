"""
Data models and type definitions for the text-to-UML pipeline.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, TypedDict, Union
from pydantic import BaseModel, ConfigDict, Field

from text2uml.config import DEFAULT_RETURN_TYPE, DEFAULT_TYPE


class PipelineMode:
    STRUCTURED = "structured"
    DIRECT = "direct"
    DOCUMENT = "document"


class TaskType(str, Enum):
    """Types of tasks that may require different models."""
    DESIGN = "design"        # Extracting classes/relationships from free text
    DIAGRAM = "diagram"      # Writing PlantUML directly
    DOCUMENT = "document"    # Writing a requirements document


class NodeNames:
    """Node names of the pipeline workflows."""
    GENERATE_DESIGN = "generate_design"
    EXTRACT_PAYLOAD = "extract_payload"
    PARSE_MODEL = "parse_model"
    GENERATE_CODE = "generate_code"
    GENERATE_PLANTUML = "generate_plantuml"
    EXTRACT_PLANTUML = "extract_plantuml"
    RENDER_IMAGE = "render_image"


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    PACKAGE = "package"


class Stereotype(str, Enum):
    NONE = "none"
    INTERFACE = "interface"
    ABSTRACT = "abstract"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Attribute(_Frozen):
    """Model for a class attribute."""
    visibility: Visibility = Field(default=Visibility.PUBLIC)
    name: str = Field(min_length=1, description="Attribute name")
    type: str = Field(default=DEFAULT_TYPE, description="Attribute type")


class Parameter(_Frozen):
    """Model for a method parameter."""
    name: str = Field(min_length=1, description="Parameter name")
    type: str = Field(default=DEFAULT_TYPE, description="Parameter type")


class Method(_Frozen):
    """Model for a class method."""
    visibility: Visibility = Field(default=Visibility.PUBLIC)
    name: str = Field(min_length=1, description="Method name")
    parameters: Tuple[Parameter, ...] = Field(default_factory=tuple)
    return_type: str = Field(
        default=DEFAULT_RETURN_TYPE,
        alias="returnType",
        description="Return type"
    )


class ClassEntity(_Frozen):
    """Model for a UML class or interface."""
    name: str = Field(min_length=1, description="Class name")
    stereotype: Stereotype = Field(default=Stereotype.NONE)
    attributes: Tuple[Attribute, ...] = Field(default_factory=tuple)
    methods: Tuple[Method, ...] = Field(default_factory=tuple)


class Inheritance(_Frozen):
    type: Literal["Inheritance"] = "Inheritance"
    child: str = Field(min_length=1)
    parent: str = Field(min_length=1)


class Realization(_Frozen):
    type: Literal["Realization"] = "Realization"
    implementer: str = Field(min_length=1)
    interface_name: str = Field(min_length=1, alias="interfaceName")


class Association(_Frozen):
    type: Literal["Association"] = "Association"
    source: str = Field(min_length=1)
    target: str = Field(min_length=1)
    label: Optional[str] = None
    multiplicity_source: Optional[str] = Field(default=None, alias="multiplicitySource")
    multiplicity_target: Optional[str] = Field(default=None, alias="multiplicityTarget")


class Aggregation(_Frozen):
    type: Literal["Aggregation"] = "Aggregation"
    container: str = Field(min_length=1)
    part: str = Field(min_length=1)
    multiplicity_part: Optional[str] = Field(default=None, alias="multiplicityPart")


class Composition(_Frozen):
    type: Literal["Composition"] = "Composition"
    container: str = Field(min_length=1)
    part: str = Field(min_length=1)
    multiplicity_part: Optional[str] = Field(default=None, alias="multiplicityPart")


Relationship = Annotated[
    Union[Inheritance, Realization, Association, Aggregation, Composition],
    Field(discriminator="type"),
]


def relationship_endpoints(rel: Relationship) -> Tuple[str, str]:
    """Return the (from, to) class names a relationship connects."""
    if isinstance(rel, Inheritance):
        return rel.child, rel.parent
    if isinstance(rel, Realization):
        return rel.implementer, rel.interface_name
    if isinstance(rel, Association):
        return rel.source, rel.target
    return rel.container, rel.part


class DiagramModel(_Frozen):
    """Validated classes and relationships of one diagram."""
    classes: Tuple[ClassEntity, ...] = Field(default_factory=tuple)
    relationships: Tuple[Relationship, ...] = Field(default_factory=tuple)

    def class_names(self) -> Tuple[str, ...]:
        return tuple(cls.name for cls in self.classes)

    def unresolved_endpoints(self) -> set:
        """Endpoint names that no declared class carries."""
        declared = set(self.class_names())
        names = set()
        for rel in self.relationships:
            names.update(n for n in relationship_endpoints(rel) if n not in declared)
        return names


class PlantUMLResult(BaseModel):
    """Result from PlantUML validation."""
    is_valid: bool = Field(description="Whether the PlantUML syntax is valid")
    error: Optional[str] = Field(
        default=None,
        description="Error message if validation failed"
    )
    url: Optional[str] = Field(
        default=None,
        description="URL to view the diagram"
    )
    svg_url: Optional[str] = Field(
        default=None,
        description="URL to view the diagram as SVG"
    )


class PipelineState(TypedDict, total=False):
    """Shared state for the LangGraph workflows."""
    requirements: str
    raw_output: Optional[str]
    payload: Optional[str]
    diagram_model: Optional[DiagramModel]
    plantuml: Optional[str]
    image: Optional[bytes]
    image_url: Optional[str]
