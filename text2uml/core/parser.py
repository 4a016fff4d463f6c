"""
Validation of design payloads into a DiagramModel.

Upstream text is noisy, so optional fields (visibility, types, stereotype,
multiplicities) are normalized to defaults. Only structural violations are
fatal: missing identifiers, unknown relationship kinds, duplicate classes.
"""

import json

from typing import Any, Dict, List, Optional, Tuple

from text2uml.config import DEFAULT_RETURN_TYPE, DEFAULT_TYPE
from text2uml.core.errors import (
    DuplicateClassNameError,
    EmptyCandidatesError,
    MalformedPayloadError,
    MissingRequiredFieldError,
    UnknownRelationshipTypeError,
    excerpt,
)
from text2uml.core.extractor import extract_json
from text2uml.core.logger import Logger
from text2uml.core.models import (
    Aggregation,
    Association,
    Attribute,
    ClassEntity,
    Composition,
    DiagramModel,
    Inheritance,
    Method,
    Parameter,
    Realization,
    Stereotype,
    Visibility,
)

VISIBILITY_ALIASES = {
    "public": Visibility.PUBLIC,
    "private": Visibility.PRIVATE,
    "protected": Visibility.PROTECTED,
    "package": Visibility.PACKAGE,
    "+": Visibility.PUBLIC,
    "-": Visibility.PRIVATE,
    "#": Visibility.PROTECTED,
    "~": Visibility.PACKAGE,
}

# kind -> ((field, json key, fallback key), ...) for the two endpoints
ENDPOINT_KEYS = {
    "Inheritance": (("child", "child", "source"), ("parent", "parent", "target")),
    "Realization": (("implementer", "implementer", "source"), ("interface_name", "interfaceName", "target")),
    "Association": (("source", "source", None), ("target", "target", None)),
    "Aggregation": (("container", "container", "source"), ("part", "part", "target")),
    "Composition": (("container", "container", "source"), ("part", "part", "target")),
}

RELATIONSHIP_CLASSES = {
    "Inheritance": Inheritance,
    "Realization": Realization,
    "Association": Association,
    "Aggregation": Aggregation,
    "Composition": Composition,
}


def _text(value: Any) -> Optional[str]:
    """Strip a scalar into a string; None for null, empty or non-scalar values."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def _required(entry: Dict[str, Any], key: str, location: str, fallback: Optional[str] = None) -> str:
    value = _text(entry.get(key))
    if value is None and fallback:
        value = _text(entry.get(fallback))
    if value is None:
        raise MissingRequiredFieldError(key, location)
    return value


def _object(value: Any, location: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedPayloadError(f"{location} must be an object, got {type(value).__name__}")
    return value


def _array(entry: Dict[str, Any], key: str, location: str) -> List[Any]:
    value = entry.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        Logger.log_warning(f"{location}.{key} is not a list; ignoring it")
        return []
    return value


def _visibility(value: Any, location: str) -> Visibility:
    text = _text(value)
    if text is None:
        return Visibility.PUBLIC
    visibility = VISIBILITY_ALIASES.get(text.lower())
    if visibility is None:
        Logger.log_warning(f"{location}: unrecognized visibility '{excerpt(text, 50)}', using public")
        return Visibility.PUBLIC
    return visibility


def _stereotype(value: Any, location: str) -> Stereotype:
    text = _text(value)
    if text is None:
        return Stereotype.NONE
    text = text.strip("<>«» ").lower()
    if text == Stereotype.INTERFACE.value:
        return Stereotype.INTERFACE
    if text == Stereotype.ABSTRACT.value:
        return Stereotype.ABSTRACT
    if text != Stereotype.NONE.value:
        Logger.log_warning(f"{location}: unrecognized stereotype '{excerpt(text, 50)}', ignoring it")
    return Stereotype.NONE


def _parse_attribute(value: Any, location: str) -> Attribute:
    entry = _object(value, location)
    return Attribute(
        visibility=_visibility(entry.get("visibility"), location),
        name=_required(entry, "name", location),
        type=_text(entry.get("type")) or DEFAULT_TYPE,
    )


def _parse_parameter(value: Any, location: str) -> Parameter:
    entry = _object(value, location)
    return Parameter(
        name=_required(entry, "name", location),
        type=_text(entry.get("type")) or DEFAULT_TYPE,
    )


def _parse_method(value: Any, location: str) -> Method:
    entry = _object(value, location)
    name = _required(entry, "name", location)
    parameters = tuple(
        _parse_parameter(param, f"{location}.parameters[{idx}]")
        for idx, param in enumerate(_array(entry, "parameters", location))
    )
    return Method(
        visibility=_visibility(entry.get("visibility"), location),
        name=name,
        parameters=parameters,
        return_type=_text(entry.get("returnType")) or DEFAULT_RETURN_TYPE,
    )


def _parse_class(value: Any, location: str) -> ClassEntity:
    entry = _object(value, location)
    name = _required(entry, "name", location)
    attributes = tuple(
        _parse_attribute(attr, f"{location}.attributes[{idx}]")
        for idx, attr in enumerate(_array(entry, "attributes", location))
    )
    methods = tuple(
        _parse_method(method, f"{location}.methods[{idx}]")
        for idx, method in enumerate(_array(entry, "methods", location))
    )
    return ClassEntity(
        name=name,
        stereotype=_stereotype(entry.get("stereotype"), location),
        attributes=attributes,
        methods=methods,
    )


def _relationship_kind(entry: Dict[str, Any], location: str) -> str:
    raw_kind = _required(entry, "type", location)
    for kind in RELATIONSHIP_CLASSES:
        if kind.lower() == raw_kind.lower():
            return kind
    raise UnknownRelationshipTypeError(raw_kind, location)


def _parse_relationship(value: Any, location: str):
    entry = _object(value, location)
    kind = _relationship_kind(entry, location)

    fields: Dict[str, Optional[str]] = {}
    for field, key, fallback in ENDPOINT_KEYS[kind]:
        fields[field] = _required(entry, key, location, fallback)

    if kind == "Association":
        fields["label"] = _text(entry.get("label"))
        fields["multiplicity_source"] = _text(entry.get("multiplicitySource"))
        fields["multiplicity_target"] = _text(entry.get("multiplicityTarget"))
    elif kind in ("Aggregation", "Composition"):
        fields["multiplicity_part"] = (
            _text(entry.get("multiplicityPart")) or _text(entry.get("multiplicityTarget"))
        )

    return RELATIONSHIP_CLASSES[kind](**fields)


def _check_unique(classes: Tuple[ClassEntity, ...]) -> None:
    seen = set()
    for cls in classes:
        if cls.name in seen:
            raise DuplicateClassNameError(cls.name)
        seen.add(cls.name)


def parse(payload: str) -> DiagramModel:
    """
    Parse a design payload into a DiagramModel.

    Valid JSON is parsed as given. Otherwise the payload may still be wrapped
    in markdown fences or prose, and is run through extract_json first.

    Args:
        payload: JSON text with "classes" and "relationships" arrays

    Returns:
        Immutable DiagramModel, classes and relationships in source order

    Raises:
        MalformedPayloadError: Payload is not valid JSON or an entry is not an object
        EmptyCandidatesError: No class list, or nothing to draw
        MissingRequiredFieldError: A name, type or endpoint is missing
        UnknownRelationshipTypeError: Relationship type outside the five kinds
        DuplicateClassNameError: Two classes share a name
    """
    try:
        candidate = payload.strip() if payload else ""
        data = json.loads(candidate)
    except json.JSONDecodeError:
        candidate = extract_json(payload)
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as e:
            raise MalformedPayloadError(str(e), candidate) from e

    if not isinstance(data, dict) or not isinstance(data.get("classes"), list):
        raise EmptyCandidatesError("Design payload has no 'classes' array")

    raw_relationships = data.get("relationships")
    if raw_relationships is None:
        raw_relationships = []
    elif not isinstance(raw_relationships, list):
        raise MalformedPayloadError("'relationships' must be an array", candidate)

    if not data["classes"] and not raw_relationships:
        raise EmptyCandidatesError("Design payload declares no classes and no relationships")

    classes = tuple(
        _parse_class(entry, f"classes[{idx}]")
        for idx, entry in enumerate(data["classes"])
    )
    _check_unique(classes)

    relationships = tuple(
        _parse_relationship(entry, f"relationships[{idx}]")
        for idx, entry in enumerate(raw_relationships)
    )

    return DiagramModel(classes=classes, relationships=relationships)
