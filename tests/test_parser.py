import json

import pytest
from pydantic import ValidationError

from text2uml.core.errors import (
    DuplicateClassNameError,
    EmptyCandidatesError,
    MalformedPayloadError,
    MissingRequiredFieldError,
    ParseError,
    UnknownRelationshipTypeError,
)
from text2uml.core.models import (
    Aggregation,
    Association,
    Composition,
    Inheritance,
    Realization,
    Stereotype,
    Visibility,
)
from text2uml.core.parser import parse


def payload(classes=None, relationships=None) -> str:
    return json.dumps({
        "classes": classes if classes is not None else [{"name": "A"}],
        "relationships": relationships if relationships is not None else [],
    })


def test_class_without_name_is_missing_required_field():
    with pytest.raises(MissingRequiredFieldError) as exc_info:
        parse(payload([{"attributes": [{"visibility": "private", "name": "x", "type": "int"}]}]))

    assert exc_info.value.field == "name"
    assert exc_info.value.location == "classes[0]"
    assert "classes[0]" in str(exc_info.value)


def test_omitted_visibility_defaults_to_public():
    model = parse(payload([{"name": "Car", "attributes": [{"name": "speed", "type": "int"}]}]))

    attr = model.classes[0].attributes[0]
    assert attr.visibility == Visibility.PUBLIC
    assert attr.name == "speed"
    assert attr.type == "int"


def test_unrecognized_visibility_is_normalized(caplog):
    model = parse(payload([{"name": "Car", "attributes": [{"visibility": "internal", "name": "vin"}]}]))

    assert model.classes[0].attributes[0].visibility == Visibility.PUBLIC
    assert "unrecognized visibility 'internal'" in caplog.text


def test_unrecognized_stereotype_warning_is_bounded(caplog):
    parse(payload([{"name": "Car", "stereotype": "x" * 500}]))

    assert "unrecognized stereotype" in caplog.text
    assert "x" * 60 not in caplog.text


def test_visibility_symbols_and_case_are_accepted():
    model = parse(payload([{
        "name": "Car",
        "attributes": [
            {"visibility": "-", "name": "a"},
            {"visibility": "PROTECTED", "name": "b"},
            {"visibility": "~", "name": "c"},
        ],
    }]))

    assert [a.visibility for a in model.classes[0].attributes] == [
        Visibility.PRIVATE, Visibility.PROTECTED, Visibility.PACKAGE
    ]


def test_type_defaults():
    model = parse(payload([{
        "name": "Shop",
        "attributes": [{"name": "title"}],
        "methods": [{"name": "open", "parameters": [{"name": "hour"}]}],
    }]))

    shop = model.classes[0]
    assert shop.attributes[0].type == "String"
    assert shop.methods[0].parameters[0].type == "String"
    assert shop.methods[0].return_type == "void"
    assert shop.methods[0].visibility == Visibility.PUBLIC


def test_method_without_name_is_fatal():
    with pytest.raises(MissingRequiredFieldError) as exc_info:
        parse(payload([{"name": "Shop", "methods": [{"returnType": "int"}]}]))
    assert exc_info.value.location == "classes[0].methods[0]"


def test_stereotypes():
    model = parse(payload([
        {"name": "Shape", "stereotype": "abstract"},
        {"name": "Drawable", "stereotype": "Interface"},
        {"name": "Circle", "stereotype": None},
        {"name": "Square", "stereotype": "entity"},
    ]))

    assert [c.stereotype for c in model.classes] == [
        Stereotype.ABSTRACT, Stereotype.INTERFACE, Stereotype.NONE, Stereotype.NONE
    ]


def test_duplicate_class_names():
    with pytest.raises(DuplicateClassNameError) as exc_info:
        parse(payload([{"name": "Car"}, {"name": "Car"}]))
    assert exc_info.value.name == "Car"


def test_duplicate_class_name_message_is_bounded():
    name = "Car" * 100
    with pytest.raises(DuplicateClassNameError) as exc_info:
        parse(payload([{"name": name}, {"name": name}]))
    assert exc_info.value.name == name
    assert len(str(exc_info.value)) < 120


def test_class_names_are_case_sensitive():
    model = parse(payload([{"name": "car"}, {"name": "Car"}]))
    assert model.class_names() == ("car", "Car")


def test_unknown_relationship_type():
    with pytest.raises(UnknownRelationshipTypeError) as exc_info:
        parse(payload(relationships=[{"type": "Orbits", "source": "Moon", "target": "Earth"}]))
    assert exc_info.value.value == "Orbits"
    assert isinstance(exc_info.value, ParseError)


def test_relationship_without_type():
    with pytest.raises(MissingRequiredFieldError) as exc_info:
        parse(payload(relationships=[{"source": "A", "target": "B"}]))
    assert exc_info.value.field == "type"


def test_relationship_variants():
    model = parse(payload(relationships=[
        {"type": "Inheritance", "child": "Dog", "parent": "Animal"},
        {"type": "realization", "implementer": "Dog", "interfaceName": "Pet"},
        {"type": "Association", "source": "Owner", "target": "Dog", "label": "walks",
         "multiplicitySource": "1", "multiplicityTarget": "*"},
        {"type": "Aggregation", "container": "Kennel", "part": "Dog"},
        {"type": "Composition", "container": "House", "part": "Room", "multiplicityPart": "1..*"},
    ]))

    inheritance, realization, association, aggregation, composition = model.relationships
    assert inheritance == Inheritance(child="Dog", parent="Animal")
    assert realization == Realization(implementer="Dog", interface_name="Pet")
    assert association == Association(
        source="Owner", target="Dog", label="walks", multiplicity_source="1", multiplicity_target="*"
    )
    assert aggregation == Aggregation(container="Kennel", part="Dog")
    assert composition == Composition(container="House", part="Room", multiplicity_part="1..*")


def test_generic_source_target_keys_are_accepted():
    model = parse(payload(relationships=[
        {"type": "Inheritance", "source": "Dog", "target": "Animal"},
        {"type": "Composition", "source": "House", "target": "Room", "multiplicityTarget": "*"},
    ]))

    assert model.relationships[0] == Inheritance(child="Dog", parent="Animal")
    assert model.relationships[1] == Composition(container="House", part="Room", multiplicity_part="*")


def test_missing_endpoint_names_the_kind_specific_field():
    with pytest.raises(MissingRequiredFieldError) as exc_info:
        parse(payload(relationships=[{"type": "Aggregation", "container": "Kennel"}]))
    assert exc_info.value.field == "part"
    assert exc_info.value.location == "relationships[0]"


def test_unresolved_endpoints_are_tolerated():
    model = parse(payload([{"name": "Dog"}], [{"type": "Inheritance", "child": "Dog", "parent": "Animal"}]))
    assert model.unresolved_endpoints() == {"Animal"}


def test_source_order_is_preserved():
    model = parse(payload(
        [{"name": "Zebra"}, {"name": "Ant"}, {"name": "Mole"}],
        [
            {"type": "Association", "source": "Zebra", "target": "Ant"},
            {"type": "Association", "source": "Ant", "target": "Mole"},
        ],
    ))
    assert model.class_names() == ("Zebra", "Ant", "Mole")
    assert [r.source for r in model.relationships] == ["Zebra", "Ant"]


def test_fenced_payload_is_unwrapped():
    model = parse('Here it is:\n```json\n{"classes": [{"name": "A"}]}\n```')
    assert model.class_names() == ("A",)
    assert model.relationships == ()


def test_malformed_json():
    with pytest.raises(MalformedPayloadError) as exc_info:
        parse('{"classes": [{"name": "A"},]')
    assert "Malformed design payload" in str(exc_info.value)


def test_non_object_entry_is_malformed():
    with pytest.raises(MalformedPayloadError):
        parse(payload(["Car"]))


@pytest.mark.parametrize("raw", [
    '{"relationships": []}',
    '[{"name": "A"}]',
    '[{"name": "A"}, {"name": "B"}]',
    '```json\n[{"name": "A"}, {"name": "B"}]\n```',
    '{"classes": {"name": "A"}}',
    '{"classes": [], "relationships": []}',
])
def test_no_class_list(raw):
    with pytest.raises(EmptyCandidatesError):
        parse(raw)


def test_model_is_immutable():
    model = parse(payload())
    with pytest.raises(ValidationError):
        model.classes[0].name = "B"
