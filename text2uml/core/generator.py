"""
PlantUML code generation from a DiagramModel.
"""

import re

from typing import List, Optional

from text2uml.core.extractor import END_SENTINEL, START_SENTINEL
from text2uml.core.models import (
    Aggregation,
    Association,
    Attribute,
    ClassEntity,
    DiagramModel,
    Inheritance,
    Method,
    Realization,
    Relationship,
    Stereotype,
    Visibility,
)

VISIBILITY_SYMBOLS = {
    Visibility.PUBLIC: "+",
    Visibility.PRIVATE: "-",
    Visibility.PROTECTED: "#",
    Visibility.PACKAGE: "~",
}

CLASS_KEYWORDS = {
    Stereotype.NONE: "class",
    Stereotype.INTERFACE: "interface",
    Stereotype.ABSTRACT: "abstract class",
}

PLAIN_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _single_line(text: str) -> str:
    """Collapse newlines and runs of whitespace so a member stays on its line."""
    return " ".join(text.split())


def format_name(name: str) -> str:
    """Render a class name, quoting anything that is not a plain identifier."""
    name = _single_line(name)
    if PLAIN_NAME.fullmatch(name):
        return name
    return '"' + name.replace('"', "'") + '"'


def _annotation(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = _single_line(text.replace('"', ""))
    return text or None


def _quoted(multiplicity: Optional[str]) -> str:
    multiplicity = _annotation(multiplicity)
    return f' "{multiplicity}"' if multiplicity else ""


def _attribute_line(attr: Attribute) -> str:
    return f"  {VISIBILITY_SYMBOLS[attr.visibility]} {_single_line(attr.name)} : {_single_line(attr.type)}"


def _method_line(method: Method) -> str:
    params = ", ".join(f"{_single_line(p.name)}: {_single_line(p.type)}" for p in method.parameters)
    name = _single_line(method.name)
    return f"  {VISIBILITY_SYMBOLS[method.visibility]} {name}({params}) : {_single_line(method.return_type)}"


def _class_block(cls: ClassEntity) -> List[str]:
    lines = [f"{CLASS_KEYWORDS[cls.stereotype]} {format_name(cls.name)} {{"]
    lines.extend(_attribute_line(attr) for attr in cls.attributes)
    lines.extend(_method_line(method) for method in cls.methods)
    lines.append("}")
    return lines


def _relationship_line(rel: Relationship) -> str:
    if isinstance(rel, Inheritance):
        return f"{format_name(rel.child)} --|> {format_name(rel.parent)}"

    if isinstance(rel, Realization):
        return f"{format_name(rel.implementer)} ..|> {format_name(rel.interface_name)}"

    if isinstance(rel, Association):
        source_mult = _quoted(rel.multiplicity_source)
        target_mult = _quoted(rel.multiplicity_target).lstrip()
        line = f"{format_name(rel.source)}{source_mult} --> "
        line += f"{target_mult} " if target_mult else ""
        line += format_name(rel.target)
        label = _annotation(rel.label)
        if label:
            line += f" : {label}"
        return line

    arrow = "o--" if isinstance(rel, Aggregation) else "*--"
    part_mult = _quoted(rel.multiplicity_part)
    return f"{format_name(rel.container)} {arrow}{part_mult} {format_name(rel.part)}"


def generate(model: DiagramModel) -> str:
    """
    Render a DiagramModel as PlantUML class-diagram source.

    Classes come first in declaration order, each followed by a blank line,
    then one line per relationship in declaration order. The output depends
    only on the model, so repeated calls yield identical text.

    Args:
        model: Validated diagram model

    Returns:
        PlantUML source from @startuml to @enduml
    """
    lines = [START_SENTINEL]

    for cls in model.classes:
        lines.extend(_class_block(cls))
        lines.append("")

    lines.extend(_relationship_line(rel) for rel in model.relationships)
    lines.append(END_SENTINEL)

    return "\n".join(lines)
