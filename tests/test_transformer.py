import logging

from matlab_codegen import transform_components
from matlab_codegen.core.config import load_config
from matlab_codegen.core.naming import ModelNameClashError, TruncationExhaustedError
from matlab_codegen.core.schema import Operation, Schema, SchemaKind, schema_from_dict
from matlab_codegen.languages.matlab import MatlabTransformer, transform_models


class TestBuild:
    def test_models_keyed_by_class_name(self, transformer, petstore_schemas):
        models = transformer.build_models(petstore_schemas)
        assert "Model200Response" in models
        assert models["Model200Response"].name == "200Response"

    def test_field_names(self, transformer, petstore_schemas):
        models = transformer.build_models(petstore_schemas)
        assert models["Pet"].get_field("end").name == "xend"
        assert models["Owner"].fields[0].name == "first_name"
        assert models["Owner"].fields[0].base_name == "first-name"

    def test_inline_union_is_lifted(self, transformer, petstore_schemas):
        models = transformer.build_models(petstore_schemas)
        owner = models["Pet"].get_field("owner")
        assert owner.type_ref.name == "PetOwnerOneOf"
        assert owner.annotations.one_of_name == "PetOwnerOneOf"
        assert models["PetOwnerOneOf"].is_synthesized
        assert len(models["PetOwnerOneOf"].one_of) == 2

    def test_referenced_union(self, transformer, petstore_schemas):
        models = transformer.build_models(petstore_schemas)
        assert models["Pet"].get_field("toy").annotations.one_of_name == "Toy"

    def test_build_leaves_enums_inline(self, transformer, petstore_schemas):
        models = transformer.build_models(petstore_schemas)
        status = models["Pet"].get_field("status")
        assert status.is_enum
        assert status.enum_name == "StatusEnum"
        assert status.type_ref.name == "string"


class TestTransform:
    def test_petstore(self, transformer, petstore_schemas):
        result = transformer.transform(petstore_schemas)
        assert result.success
        assert result.warnings == []

        pet = result.models["Pet"]
        assert pet.get_field("status").type_ref.name == "PetStatusEnum"
        assert [v.name for v in result.models["PetKindEnum"].enum_values] == ["Dog", "Cat"]
        assert result.metadata["lifted_enums"] == ["PetStatusEnum", "PetKindEnum"]

    def test_field_types(self, transformer, petstore_schemas):
        pet = transformer.transform(petstore_schemas).models["Pet"]

        born = pet.get_field("born")
        assert born.type_ref.name == "datetime"
        assert born.annotations.is_posix_time

        tags = pet.get_field("tags")
        assert tags.is_array
        assert tags.type_ref.name == "Tag"
        assert tags.items.type_ref.name == "Tag"

        attributes = pet.get_field("attributes")
        assert attributes.is_map
        assert attributes.type_ref.name == "OpenAPIClientPackage.JSONMapperMap"

        assert pet.get_field("id").type_ref.name == "int64"
        assert pet.get_field("name").required

    def test_union_marks(self, transformer, petstore_schemas):
        pet = transformer.transform(petstore_schemas).models["Pet"]
        assert pet.get_field("owner").annotations.is_one_of_primitives
        assert not pet.get_field("toy").annotations.is_one_of_primitives

    def test_model_enum(self, transformer, petstore_schemas):
        color = transformer.transform(petstore_schemas).models["Color"]
        assert [v.name for v in color.enum_values] == ["red", "green"]

    def test_metadata(self, transformer, petstore_schemas):
        metadata = transformer.transform(petstore_schemas).metadata
        assert metadata["flavour"] == "matlab-client"
        assert metadata["error_identifier"] == "OpenAPIClientPackage"
        assert metadata["api_package"] == "OpenAPIClientPackage.api"
        assert metadata["model_package"] == "OpenAPIClientPackage.models"
        assert metadata["model_count"] == 11
        assert metadata["truncated_names"] == 0

    def test_operations(self, transformer):
        status = transformer.build_parameter(
            "status", schema_from_dict({"type": "array", "items": {"type": "string"}})
        )
        op = Operation(
            operation_id="findPetsByStatus",
            http_method="GET",
            tags=["pet"],
            parameters=[status],
        )
        result = transformer.transform({}, [op])
        processed = result.operations[0]
        assert processed.nickname == "findPetsByStatus"
        assert processed.annotations.error_identifier == (
            "OpenAPIClientPackage:api:findPetsByStatus"
        )
        assert processed.parameters[0].example_literal == (
            "ListContainerExample['Example string']"
        )

    def test_map_parameter(self, transformer):
        param = transformer.build_parameter(
            "counts", schema_from_dict({"type": "object", "additionalProperties": {"type": "integer"}})
        )
        assert param.is_map
        assert param.data_type.name == "int32"

    def test_unknown_model_reported(self, transformer):
        schemas = {
            "Pet": Schema(
                kind=SchemaKind.OBJECT,
                properties={"owner": Schema(kind=SchemaKind.OBJECT, ref="Owner")},
            )
        }
        result = transformer.transform(schemas)
        assert result.warnings == ["Field Pet.owner references unknown model 'Owner'"]


class TestRuns:
    def test_runs_do_not_share_truncations(self):
        first_name = "VeryLongSchemaName" * 4 + "A"
        second_name = "VeryLongSchemaName" * 4 + "B"

        first = MatlabTransformer()
        first.sanitizer.model_name(first_name)
        assert first.sanitizer.model_name(second_name).endswith("_0001")

        second = MatlabTransformer()
        assert second.sanitizer.model_name(second_name).endswith("_0000")

    def test_exhausted_truncation_fails_run(self):
        transformer = MatlabTransformer()
        transformer.registry.max_attempts = 1
        schemas = {
            "VeryLongSchemaName" * 4 + "A": Schema(kind=SchemaKind.OBJECT),
            "VeryLongSchemaName" * 4 + "B": Schema(kind=SchemaKind.OBJECT),
        }
        result = transform_models(transformer, schemas)
        assert not result.success
        assert isinstance(result.exception, TruncationExhaustedError)
        assert result.models == {}

    def test_server_flavour(self):
        transformer = MatlabTransformer(load_config("matlab-server"))
        op = Operation(operation_id="deletePet", http_method="DELETE")
        processed = transformer.transform({}, [op]).operations[0]
        assert processed.annotations.http_method == "del"
        assert processed.annotations.error_identifier == (
            "OpenAPIServerPackage:impl:deletePet"
        )


class TestTransformComponents:
    def test_with_override_dict(self, petstore):
        result = transform_components(petstore, {"package_name": "PetStore"})
        assert result.success
        pet = result.models["Pet"]
        assert pet.get_field("attributes").type_ref.name == "PetStore.JSONMapperMap"

    def test_with_config_file(self, petstore, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"package_name": "FileStore"}', encoding="utf-8")
        result = transform_components(petstore, path)
        assert result.metadata["package_name"] == "FileStore"

    def test_input_document_untouched(self, petstore):
        before = str(petstore)
        transform_components(petstore)
        assert str(petstore) == before


class TestSharedRegistry:
    def test_components_share_one_registry(self, transformer):
        registry = transformer.registry
        assert transformer.sanitizer.registry is registry
        assert transformer.type_mapper.sanitizer.registry is registry
        assert transformer.normalizer.enum_lifter.sanitizer.registry is registry
        assert transformer.operation_annotator.sanitizer.registry is registry

    def test_truncated_model_names_counted(self, transformer):
        schemas = {"VeryLongSchemaName" * 4 + "A": Schema(kind=SchemaKind.OBJECT)}
        assert transformer.transform(schemas).metadata["truncated_names"] == 1

    def test_union_and_model_names_stay_distinct(self, transformer):
        owner = "O" * 70
        other = "O" * 52 + "XOneOf" + "Z" * 10
        schemas = {
            owner: schema_from_dict(
                {"type": "object", "properties": {"x": {"oneOf": [{"type": "string"}]}}}
            ),
            other: schema_from_dict({"type": "object"}),
        }
        models = transformer.build_models(schemas)
        assert len(models) == 3
        assert models["O" * 58 + "_0000"].name == owner
        assert models["O" * 52 + "XOneOf_0000"].is_synthesized
        assert models["O" * 52 + "XOneOf_0001"].name == other


class TestNameClashes:
    def test_schemas_with_one_class_name(self, transformer):
        schemas = {
            "pet-item": Schema(kind=SchemaKind.OBJECT),
            "pet_item": Schema(kind=SchemaKind.OBJECT),
        }
        result = transform_models(transformer, schemas)
        assert not result.success
        assert isinstance(result.exception, ModelNameClashError)
        assert "pet_item" in result.error_message

    def test_schema_named_like_lifted_union(self, transformer):
        schemas = {
            "Pet": schema_from_dict(
                {"properties": {"owner": {"oneOf": [{"type": "string"}]}}}
            ),
            "PetOwnerOneOf": schema_from_dict({"type": "object"}),
        }
        result = transform_models(transformer, schemas)
        assert not result.success
        assert isinstance(result.exception, ModelNameClashError)


class TestArrayFields:
    def test_array_of_inline_enum_is_lifted(self, transformer):
        schemas = {
            "Pet": schema_from_dict(
                {
                    "properties": {
                        "labels": {
                            "type": "array",
                            "items": {"enum": ["a", "b"], "x-enumNames": ["Alpha", "Beta"]},
                        }
                    }
                }
            )
        }
        result = transformer.transform(schemas)
        labels = result.models["Pet"].get_field("labels")
        assert labels.type_ref.name == "PetLabelsEnum"
        assert labels.type_ref.is_array
        assert labels.items.type_ref.name == "PetLabelsEnum"
        lifted = result.models["PetLabelsEnum"]
        assert [v.name for v in lifted.enum_values] == ["Alpha", "Beta"]
        assert [v.value for v in lifted.enum_values] == ["a", "b"]
        assert result.warnings == []

    def test_array_of_inline_union(self, transformer, caplog):
        schemas = {
            "Pet": schema_from_dict(
                {
                    "properties": {
                        "vals": {
                            "type": "array",
                            "items": {"oneOf": [{"type": "string"}, {"type": "integer"}]},
                        }
                    }
                }
            )
        }
        with caplog.at_level(logging.WARNING):
            result = transformer.transform(schemas)
        vals = result.models["Pet"].get_field("vals")
        assert vals.type_ref.name == "PetValsOneOf"
        assert vals.type_ref.is_array
        assert vals.annotations.one_of_name == "PetValsOneOf"
        assert vals.items.annotations.is_one_of_primitives
        assert "PetValsOneOf" in result.models
        assert "Cannot name" not in caplog.text
        assert result.warnings == []
