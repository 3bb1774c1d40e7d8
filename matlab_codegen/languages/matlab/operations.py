"""
Operation naming and annotations.

Names operations, parameters and tags, and attaches the hints the
client and server templates read: error identifiers, the server
handler method and object-parameter flags.
"""

from typing import Iterable, List, Tuple

from ...core.naming import NameSanitizer
from ...core.schema import Operation
from ...logging_config import get_logger

logger = get_logger(__name__)


# HTTP methods whose name is not usable as a MATLAB method
SERVER_METHOD_NAMES = {"delete": "del"}


def parse_object_params(text: str) -> List[Tuple[str, str]]:
    """
    Parse ``name/Type/name/Type`` into (name, type) pairs.

    A trailing name without a type is dropped with a warning.
    """
    if not text:
        return []

    parts = text.split("/")
    if len(parts) % 2:
        logger.warning("Ignoring object parameter without a type: %s", parts[-1])
        parts = parts[:-1]
    return list(zip(parts[0::2], parts[1::2]))


def error_identifier(*parts: str) -> str:
    """MATLAB message identifier from dotted name parts."""
    return ".".join(p for p in parts if p).replace(".", ":")


class OperationAnnotator:
    """Names and annotates the operations of one API package."""

    def __init__(
        self,
        sanitizer: NameSanitizer,
        api_package: str,
        server: bool = False,
        object_params: Iterable[Tuple[str, str]] = (),
    ):
        """
        Args:
            sanitizer: Name sanitizer of the run
            api_package: Fully qualified API package (e.g. ``Pkg.api``)
            server: Annotate handler methods for the server flavour
            object_params: (parameter name, type) pairs passed as objects (client only)
        """
        self.sanitizer = sanitizer
        self.api_package = api_package
        self.server = server
        self.object_param_names = {name for name, _ in object_params}

    def annotate(self, operation: Operation) -> Operation:
        operation.nickname = self.sanitizer.operation_id(operation.operation_id)
        operation.tags = [self.sanitizer.tag_name(tag) for tag in operation.tags]
        operation.annotations.error_identifier = error_identifier(
            self.api_package, operation.nickname
        )

        if self.server:
            method = operation.http_method.lower()
            operation.annotations.http_method = SERVER_METHOD_NAMES.get(method, method)

        for parameter in operation.parameters:
            parameter.param_name = self.sanitizer.param_name(parameter.name)
            if not self.server and parameter.param_name in self.object_param_names:
                parameter.annotations.is_object_param = True

        return operation
