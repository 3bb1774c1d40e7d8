"""
Example literals for operation parameters.

Used by documentation and test scaffolding templates to show a call
with plausible argument values.
"""

import json
from typing import Any, Iterable, Mapping, Optional

from ...core.schema import Parameter
from ...logging_config import get_logger
from .naming import escape_text
from .types import MatlabType

logger = get_logger(__name__)


EXAMPLE_PLACEHOLDER = "exampleNULL"
EXAMPLE_STRING = "Example string"

CANNED_EXAMPLES = {
    MatlabType.LOGICAL: "true",
    MatlabType.STRING: EXAMPLE_STRING,
    MatlabType.INT32: "56",
    MatlabType.INT64: "56",
    MatlabType.DOUBLE: "3.4",
    MatlabType.SINGLE: "3.4",
    MatlabType.DATETIME: "2013-10-20T19:20:30+01:00",
}


def _value_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "[]"
    if isinstance(value, (list, tuple, Mapping)):
        return json.dumps(value)
    return str(value)


class ExampleValueSynthesizer:
    """Produces an example literal for a parameter."""

    def example(self, parameter: Parameter) -> str:
        """
        Build the example literal for a parameter.

        Prefers the declared default, then the declared example, then a
        canned literal for the parameter's type. Arrays and maps wrap the
        literal in container templates; a declared list or object is
        rendered entry by entry inside its container.

        Args:
            parameter: Parameter with a resolved data type

        Returns:
            Example literal (never empty)
        """
        declared = parameter.default
        if declared is None:
            declared = parameter.example

        kind = parameter.data_type.primitive
        if kind not in CANNED_EXAMPLES:
            logger.warning(
                "Type %s of parameter %s has no example literal",
                parameter.data_type.name,
                parameter.name,
            )
            if declared is None:
                return EXAMPLE_PLACEHOLDER
        elif declared is None:
            declared = CANNED_EXAMPLES[kind]

        if parameter.is_array:
            values = declared if isinstance(declared, (list, tuple)) else [declared]
            body = ", ".join(self.literal(v, kind) for v in values)
            return f"ListContainerExample[{body}]"
        if parameter.is_map:
            if isinstance(declared, Mapping):
                entries = list(declared.items())
            else:
                entries = [("key", declared)]
            body = ", ".join(
                f"'{escape_text(str(k))}': {self.literal(v, kind)}" for k, v in entries
            )
            return f"MapContainerExample{{{body}}}"
        return self.literal(declared, kind)

    def literal(self, value: Any, kind: Optional[MatlabType]) -> str:
        """Render one value; strings of string-typed parameters are quoted."""
        text = _value_text(value)
        nested = value is None or isinstance(value, (list, tuple, Mapping))
        if kind == MatlabType.STRING and not nested:
            return f"'{escape_text(text)}'"
        return text

    def populate(self, parameters: Iterable[Parameter]):
        """Store the example literal on each parameter."""
        for parameter in parameters:
            parameter.example_literal = self.example(parameter)
