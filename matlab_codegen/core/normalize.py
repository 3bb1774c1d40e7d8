"""
Model normalization pass.

Runs once over the complete model collection: inline enumerations
become named enum models and fields typed as one-of compositions are
marked when a member is a primitive or an array.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..logging_config import get_logger
from .naming import NameSanitizer
from .schema import Annotations, EnumValue, Field, Model, TypeRef

logger = get_logger(__name__)


EMPTY_ENUM_NAME = "EMPTY_STRING"


@dataclass
class NormalizationReport:
    """What a normalization run changed."""

    lifted_enums: List[str] = field(default_factory=list)
    escaped_enums: List[str] = field(default_factory=list)
    one_of_primitive_fields: List[str] = field(default_factory=list)


def _literal_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


class EnumLifter:
    """Turns inline field enumerations into named enum models."""

    def __init__(self, sanitizer: NameSanitizer, enum_name_extensions: Sequence[str]):
        """
        Args:
            sanitizer: Name sanitizer of the run (its registry keys lifted names)
            enum_name_extensions: Extension keys holding display names, by priority
        """
        self.sanitizer = sanitizer
        self.enum_name_extensions = list(enum_name_extensions)

    def enum_values(
        self, values: Sequence[Any], annotations: Annotations, owner: str = ""
    ) -> List[EnumValue]:
        """Pair each literal with a legal, non-empty display name."""
        names = self.display_names(annotations)
        if names is not None and len(names) < len(values):
            logger.warning(
                "%s lists %d enum names for %d values, deriving the rest",
                owner or "Enum",
                len(names),
                len(values),
            )

        entries = []
        for index, value in enumerate(values):
            if names is not None and index < len(names):
                source = _literal_text(names[index])
            else:
                source = _literal_text(value)
            name = self.sanitizer.var_name(source, fallback=EMPTY_ENUM_NAME)
            entries.append(EnumValue(name=name, value=value))
        return entries

    def display_names(self, annotations: Annotations) -> Optional[List[Any]]:
        names = annotations.first_present(self.enum_name_extensions)
        if names is None:
            return None
        if not isinstance(names, (list, tuple)):
            logger.warning("Ignoring enum names that are not a list: %r", names)
            return None
        return list(names)

    def lift_field(self, owner: Model, prop: Field) -> Model:
        """
        Build the enum model for an inline enum field and point the field at it.

        The new name is the truncation of the owner's class name joined
        with the field's enum name, so the same pair always maps to
        the same model.
        """
        enum_name = prop.enum_name or prop.name
        new_name = self.sanitizer.registry.truncate(owner.class_name, enum_name)

        prop.type_ref = TypeRef(
            name=new_name, is_model=True, is_array=prop.type_ref.is_array
        )
        prop.is_primitive = False
        if prop.items is not None and prop.items.is_enum:
            prop.items.type_ref = TypeRef.model(new_name)
            prop.items.is_primitive = False

        return Model(
            name=new_name,
            class_name=new_name,
            is_enum=True,
            allowable_values=list(prop.allowable_values),
            enum_values=self.enum_values(
                prop.allowable_values, prop.annotations, f"{owner.name}.{prop.base_name}"
            ),
            description=prop.description,
            is_synthesized=True,
            annotations=Annotations(extensions=dict(prop.annotations.extensions)),
        )

    def escape_model(self, model: Model):
        """Derive display names for a model that is itself an enum."""
        model.enum_values = self.enum_values(
            model.allowable_values, model.annotations, model.name
        )


class UnionAnnotator:
    """Marks one-of fields whose members include primitives or arrays."""

    def annotate(self, prop: Field, models: Mapping[str, Model]) -> bool:
        """
        Annotate a field, looking through one array level.

        Returns:
            True if the field carries the mark afterwards
        """
        target = prop.items if prop.is_array and prop.items is not None else prop
        if not target.annotations.one_of_name:
            return False

        union = models.get(target.type_ref.name)
        if union is None:
            logger.warning(
                "One-of model %s referenced by %s not found",
                target.type_ref.name,
                prop.name,
            )
            return False

        if any(member.is_primitive or member.is_array for member in union.one_of):
            target.annotations.is_one_of_primitives = True
        return target.annotations.is_one_of_primitives


class ModelNormalizer:
    """Runs enum lifting and union annotation across all models."""

    def __init__(
        self,
        sanitizer: NameSanitizer,
        enum_name_extensions: Sequence[str] = ("x-enumNames",),
    ):
        self.enum_lifter = EnumLifter(sanitizer, enum_name_extensions)
        self.union_annotator = UnionAnnotator()
        self.last_report: Optional[NormalizationReport] = None

    def normalize(self, models: Mapping[str, Model]) -> Dict[str, Model]:
        """
        Normalize a complete model collection.

        The input is left untouched; the returned collection holds
        rewritten copies of the input models plus synthesized enums.

        Args:
            models: Models keyed by name, as built from the document

        Returns:
            New collection with synthesized enum models merged in
        """
        result = {name: copy.deepcopy(model) for name, model in models.items()}
        report = NormalizationReport()
        lifted: Dict[str, Model] = {}

        for key in models:
            model = result[key]

            if model.is_enum:
                self.enum_lifter.escape_model(model)
                report.escaped_enums.append(model.name)
                continue

            if not model.has_fields:
                continue

            for prop in model.fields:
                if prop.is_enum:
                    enum_model = self.enum_lifter.lift_field(model, prop)
                    if enum_model.name not in lifted:
                        lifted[enum_model.name] = enum_model
                        report.lifted_enums.append(enum_model.name)

                if self.union_annotator.annotate(prop, result):
                    report.one_of_primitive_fields.append(f"{model.name}.{prop.name}")

        for name, enum_model in lifted.items():
            if name in result and not result[name].is_synthesized:
                logger.warning("Lifted enum %s replaces an existing model", name)
            result[name] = enum_model

        logger.info(
            "Normalized %d models: %d enums lifted, %d one-of fields marked",
            len(models),
            len(report.lifted_enums),
            len(report.one_of_primitive_fields),
        )
        self.last_report = report
        return result
