"""
MATLAB transformer implementation.

Builds generation models from OpenAPI schemas, normalizes them
and prepares operations for the MATLAB client and server templates.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from ...core.config import GeneratorConfig, load_config
from ...core.naming import ModelNameClashError, NamingError, TruncationRegistry
from ...core.normalize import ModelNormalizer, NormalizationReport
from ...core.schema import (
    Annotations,
    Field,
    Model,
    Operation,
    Parameter,
    Schema,
    SchemaKind,
    TypeRef,
)
from ...logging_config import get_logger
from .config import MatlabConfig
from .examples import ExampleValueSynthesizer
from .naming import create_matlab_sanitizer
from .operations import OperationAnnotator
from .types import FREE_FORM_MODEL, MatlabTypeMapper

logger = get_logger(__name__)


class MatlabTransformer:
    """
    Model transformation for MATLAB code generation.

    One instance is one generation run: it owns the truncation
    registry shared by naming, type mapping and normalization.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize transformer with configuration."""
        self.config = MatlabConfig.from_config(config or load_config())

        # Run-scoped naming state
        self.registry = TruncationRegistry()
        self.sanitizer = create_matlab_sanitizer(self.registry)

        self.type_mapper = MatlabTypeMapper(self.sanitizer, self.config.package_name)
        self.normalizer = ModelNormalizer(
            self.sanitizer, self.config.enum_name_extensions
        )
        self.examples = ExampleValueSynthesizer()
        self.operation_annotator = OperationAnnotator(
            self.sanitizer,
            self.config.qualified_api_package(),
            server=self.config.is_server,
            object_params=self.config.object_param_pairs(),
        )

    # Phase one: build

    def build_models(self, schemas: Mapping[str, Schema]) -> Dict[str, Model]:
        """
        Build one model per named schema.

        Args:
            schemas: Named OpenAPI schemas

        Returns:
            Models keyed by class name, including union models lifted
            from inline one-of properties

        Raises:
            ModelNameClashError: If two models end up with one class name
        """
        models: Dict[str, Model] = {}

        for name, schema in schemas.items():
            self._add_model(models, self.build_model(name, schema, schemas, models))

        logger.debug("Built %d models from %d schemas", len(models), len(schemas))
        return models

    @staticmethod
    def _add_model(models: Dict[str, Model], model: Model):
        existing = models.get(model.class_name)
        if existing is not None:
            raise ModelNameClashError(
                f"Models '{existing.name}' and '{model.name}' both map to "
                f"class name {model.class_name}"
            )
        models[model.class_name] = model

    def build_model(
        self,
        name: str,
        schema: Schema,
        schemas: Mapping[str, Schema],
        models: Dict[str, Model],
    ) -> Model:
        model = Model(
            name=name,
            class_name=self.sanitizer.model_name(name),
            description=schema.description,
            annotations=Annotations(extensions=dict(schema.extensions)),
        )

        if schema.is_enum:
            model.is_enum = True
            model.allowable_values = list(schema.enum)
        elif schema.is_union:
            model.one_of = list(schema.one_of)
        elif schema.kind == SchemaKind.OBJECT and schema.ref is None:
            for prop_name, prop_schema in schema.properties.items():
                model.fields.append(
                    self.build_field(
                        model,
                        prop_name,
                        prop_schema,
                        prop_name in schema.required,
                        schemas,
                        models,
                    )
                )

        return model

    def build_field(
        self,
        owner: Model,
        prop_name: str,
        schema: Schema,
        required: bool,
        schemas: Mapping[str, Schema],
        models: Dict[str, Model],
    ) -> Field:
        name = self.sanitizer.var_name(prop_name)

        items = None
        if schema.is_array and schema.items is not None:
            items = self.build_field(
                owner, prop_name, schema.items, False, schemas, models
            )

        # Arrays of enums are lifted through the outer field
        enum_schema = schema
        extensions = dict(schema.extensions)
        if items is not None and schema.items.is_enum:
            enum_schema = schema.items
            extensions = {**schema.items.extensions, **schema.extensions}
        annotations = Annotations(extensions=extensions)

        if schema.is_union:
            type_ref = TypeRef.model(self._lift_union(owner, name, schema, models))
            annotations.one_of_name = type_ref.name
        elif items is not None and items.annotations.one_of_name:
            type_ref = TypeRef(name=items.type_ref.name, is_model=True, is_array=True)
            annotations.one_of_name = items.annotations.one_of_name
        else:
            type_ref = self.type_mapper.resolve(schema)
            target = schemas.get(schema.ref) if schema.ref else None
            if target is not None and target.is_union:
                annotations.one_of_name = type_ref.name
        annotations.is_posix_time = type_ref.is_posix_time

        return Field(
            name=name,
            base_name=prop_name,
            type_ref=type_ref,
            is_enum=enum_schema.is_enum,
            enum_name=f"{name[0].upper()}{name[1:]}Enum" if enum_schema.is_enum else None,
            allowable_values=list(enum_schema.enum),
            is_array=schema.is_array,
            is_map=schema.kind == SchemaKind.MAP,
            is_primitive=type_ref.is_primitive,
            items=items,
            required=required,
            description=schema.description,
            annotations=annotations,
        )

    def _lift_union(
        self, owner: Model, field_name: str, schema: Schema, models: Dict[str, Model]
    ) -> str:
        """Register an inline one-of as a named union model."""
        suffix = f"{field_name[0].upper()}{field_name[1:]}OneOf"
        union_name = self.registry.truncate(owner.class_name, suffix)
        self._add_model(
            models,
            Model(
                name=union_name,
                class_name=union_name,
                one_of=list(schema.one_of),
                description=schema.description,
                is_synthesized=True,
            ),
        )
        return union_name

    def build_parameter(
        self,
        name: str,
        schema: Schema,
        location: str = "query",
        required: bool = False,
    ) -> Parameter:
        """Build an operation parameter with its resolved type."""
        if schema.kind == SchemaKind.MAP and schema.ref is None:
            value_schema = schema.items or Schema(kind=SchemaKind.ANY)
            data_type = self.type_mapper.resolve(value_schema)
        else:
            data_type = self.type_mapper.resolve(schema)

        return Parameter(
            name=name,
            data_type=data_type,
            location=location,
            required=required,
            default=schema.default,
            example=schema.example,
            is_array=data_type.is_array,
            is_map=schema.kind == SchemaKind.MAP,
            annotations=Annotations(
                is_posix_time=data_type.is_posix_time,
                extensions=dict(schema.extensions),
            ),
        )

    # Phase two: normalize

    def normalize(self, models: Mapping[str, Model]) -> Dict[str, Model]:
        """Lift inline enums and annotate one-of fields."""
        return self.normalizer.normalize(models)

    @property
    def last_report(self) -> Optional[NormalizationReport]:
        return self.normalizer.last_report

    # Operations

    def process_operations(self, operations: Iterable[Operation]) -> List[Operation]:
        """Name and annotate operations and fill parameter examples."""
        processed = []
        for operation in operations:
            self.operation_annotator.annotate(operation)
            self.examples.populate(operation.parameters)
            processed.append(operation)
        return processed

    def validate_models(self, models: Mapping[str, Model]) -> List[str]:
        """
        Check a normalized collection for structural issues.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for model in models.values():
            if model.is_enum and not model.enum_values:
                warnings.append(f"Enum model '{model.class_name}' has no values")

            for prop in model.fields:
                ref = prop.items.type_ref if prop.items is not None else prop.type_ref
                if (
                    ref.is_model
                    and ref.name != FREE_FORM_MODEL
                    and ref.name not in models
                ):
                    warnings.append(
                        f"Field {model.class_name}.{prop.name} references "
                        f"unknown model '{ref.name}'"
                    )

        return warnings

    def transform(
        self, schemas: Mapping[str, Schema], operations: Iterable[Operation] = ()
    ) -> "TransformResult":
        """Run build, normalize and operation processing."""
        models = self.normalize(self.build_models(schemas))
        processed = self.process_operations(operations)
        report = self.last_report

        metadata = {
            "flavour": self.config.flavour,
            "package_name": self.config.package_name,
            "error_identifier": self.config.error_identifier_root,
            "api_package": self.config.qualified_api_package(),
            "model_package": self.config.qualified_model_package(),
            "model_count": len(models),
            "operation_count": len(processed),
            "lifted_enums": list(report.lifted_enums) if report else [],
            "truncated_names": len(self.registry),
        }
        return TransformResult(
            models, processed, self.validate_models(models), metadata
        )


class TransformResult:
    """Container for transformation results and metadata."""

    def __init__(
        self,
        models: Dict[str, Model],
        operations: List[Operation] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize transformation result.

        Args:
            models: Normalized models keyed by class name
            operations: Named and annotated operations
            warnings: Structural warnings found after normalization
            metadata: Additional metadata about the run
        """
        self.models = models
        self.operations = operations or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "TransformResult":
        """Create a failed transformation result."""
        result = cls(models={})
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def transform_models(
    transformer: MatlabTransformer,
    schemas: Mapping[str, Schema],
    operations: Iterable[Operation] = (),
) -> TransformResult:
    """
    Transform schemas with a transformer, reporting naming failures.

    Args:
        transformer: Transformer for this run
        schemas: Named OpenAPI schemas
        operations: Operations to name and annotate

    Returns:
        TransformResult; unsuccessful only if truncation names ran out
    """
    try:
        return transformer.transform(schemas, operations)
    except NamingError as e:
        logger.error("Transformation failed: %s", e)
        return TransformResult.error(f"Transformation failed: {str(e)}", exception=e)
