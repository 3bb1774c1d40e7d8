"""
Naming utilities for safe code generation.

Handles identifier sanitization per syntactic role, reserved word
conflicts, case conversion and length truncation with a run-scoped
uniqueness registry.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Set, Tuple

from ..logging_config import get_logger

logger = get_logger(__name__)


MAX_IDENTIFIER_LENGTH = 63
TRUNCATED_PREFIX_LENGTH = 58
COUNTER_DIGITS = 4
MAX_TRUNCATION_ATTEMPTS = 10**COUNTER_DIGITS


class NamingError(Exception):
    """Exception raised for unrecoverable naming failures."""

    pass


class TruncationExhaustedError(NamingError):
    """Raised when every counter value for a truncated name is taken."""

    pass


class ModelNameClashError(NamingError):
    """Raised when two models would be generated under one class name."""

    pass


class NameRole(Enum):
    """Syntactic context of an identifier."""

    MODEL = "model"
    FIELD = "field"
    PARAMETER = "parameter"
    OPERATION = "operation"
    TAG = "tag"


class TruncationRegistry:
    """
    Memo table for names shortened to the identifier length limit.

    A (name, suffix) pair submitted more than once always gets the same
    result, and two different pairs never share one. One registry
    belongs to one generation run; it is not safe for concurrent use.
    """

    def __init__(self, max_attempts: int = MAX_TRUNCATION_ATTEMPTS):
        self.max_attempts = min(max_attempts, MAX_TRUNCATION_ATTEMPTS)
        self._truncated: Dict[Tuple[str, str], str] = {}
        self._issued: Set[str] = set()

    def truncate(self, name: str, suffix: str = "") -> str:
        """
        Return ``name + suffix`` bounded to the identifier length limit.

        Args:
            name: Base name
            suffix: Suffix kept intact after truncation

        Returns:
            The joined name if short enough, else a truncated unique name

        Raises:
            TruncationExhaustedError: If every counter value collides
        """
        if len(name) + len(suffix) <= MAX_IDENTIFIER_LENGTH:
            return name + suffix

        key = (name, suffix)
        if key in self._truncated:
            return self._truncated[key]

        keep = TRUNCATED_PREFIX_LENGTH - len(suffix)
        if keep < 1:
            # Suffix alone is too long to keep; shorten the whole name
            base = (name + suffix)[:TRUNCATED_PREFIX_LENGTH]
        else:
            base = name[:keep] + suffix

        for counter in range(self.max_attempts):
            candidate = f"{base}_{counter:0{COUNTER_DIGITS}d}"
            if candidate not in self._issued:
                break
        else:
            raise TruncationExhaustedError(
                f"No unique truncation left for '{name}{suffix}' "
                f"after {self.max_attempts} attempts"
            )

        self._truncated[key] = candidate
        self._issued.add(candidate)
        logger.debug("Truncated %s%s to %s", name, suffix, candidate)
        return candidate

    def __len__(self) -> int:
        return len(self._truncated)

    def __contains__(self, item) -> bool:
        if isinstance(item, tuple):
            return item in self._truncated
        return (item, "") in self._truncated


def camelize(name: str, lower_first: bool = False) -> str:
    """
    Join underscore separated words, capitalizing each.

    ``model_200_response`` -> ``Model200Response``; with
    ``lower_first`` the first word keeps a lowercase initial.
    """
    parts = [p for p in name.split("_") if p]
    if not parts:
        return name

    words = [p[0].upper() + p[1:] for p in parts]
    if lower_first:
        words[0] = words[0][0].lower() + words[0][1:]
    return "".join(words)


def clean_name(name: str) -> str:
    """Replace separators with underscores and drop remaining punctuation."""
    name = name.replace("[]", "")
    name = re.sub(r"[\[(.\-| /]", "_", name)
    name = re.sub(r"[\])]", "", name)
    return re.sub(r"\W", "", name, flags=re.ASCII)


@dataclass(frozen=True)
class RolePolicy:
    """Rules that differ between naming roles."""

    marker: str = "x"  # Prefix for leading digits and reserved words
    recase: bool = False  # Camel-case marker + name instead of plain prefix
    lower_first: bool = False
    map_symbols: bool = False
    extra_reserved: FrozenSet[str] = frozenset()
    placeholder: str = "x"  # Used when nothing legal is left of a name
    warn: bool = False  # Report rewrites at warning level


class NameSanitizer:
    """Turns OpenAPI names into legal target identifiers."""

    def __init__(
        self,
        reserved_words: Set[str],
        policies: Dict[NameRole, RolePolicy],
        symbol_words: Optional[Dict[str, str]] = None,
        registry: Optional[TruncationRegistry] = None,
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Language reserved words, compared case-insensitively
            policies: Rule set per naming role
            symbol_words: Operator characters and their spelled-out replacements
            registry: Truncation registry shared with the rest of the run
        """
        self.reserved_words = {w.lower() for w in reserved_words}
        self.policies = policies
        self.symbol_words = symbol_words or {}
        self.registry = registry if registry is not None else TruncationRegistry()

    def is_reserved(self, name: str, role: NameRole) -> bool:
        lowered = name.lower()
        return lowered in self.reserved_words or lowered in self.policies[
            role
        ].extra_reserved

    def sanitize(
        self, name: str, role: NameRole, fallback: Optional[str] = None
    ) -> str:
        """
        Sanitize a name for use in the given role.

        Args:
            name: Name as written in the document
            role: Syntactic role of the identifier
            fallback: Identifier to use when nothing of the name survives

        Returns:
            Legal identifier of at most the maximum length
        """
        policy = self.policies[role]
        original = name if name is not None else ""

        cleaned = original.replace("$", "")
        if policy.map_symbols:
            for symbol, word in self.symbol_words.items():
                cleaned = cleaned.replace(symbol, word)
        cleaned = clean_name(cleaned.replace("-", "_"))

        if not cleaned:
            cleaned = fallback or policy.placeholder
            self._report(
                policy, "Empty %s name %r, using %s", role.value, original, cleaned
            )

        if cleaned[0].isdigit():
            renamed = self._prefix(cleaned, policy)
            self._report(
                policy,
                "%s name cannot start with a number: %s renaming to: %s",
                role.value,
                cleaned,
                renamed,
            )
            cleaned = renamed

        if cleaned.startswith("_"):
            cleaned = "x" + cleaned

        if self.is_reserved(cleaned, role):
            renamed = self._prefix(cleaned, policy)
            self._report(
                policy,
                "Cannot use reserved word as %s name: %s renaming to: %s",
                role.value,
                cleaned,
                renamed,
            )
            cleaned = renamed

        result = self.registry.truncate(cleaned)
        if result != original:
            logger.debug("%s name changed from: %s to: %s", role.value, original, result)
        return result

    def _prefix(self, name: str, policy: RolePolicy) -> str:
        if policy.recase:
            return camelize(f"{policy.marker}_{name}", policy.lower_first)
        return policy.marker + name

    @staticmethod
    def _report(policy: RolePolicy, message: str, *args):
        if policy.warn:
            logger.warning(message, *args)
        else:
            logger.debug(message, *args)

    # Convenience wrappers per role
    def model_name(self, name: str) -> str:
        return self.sanitize(name, NameRole.MODEL)

    def var_name(self, name: str, fallback: Optional[str] = None) -> str:
        return self.sanitize(name, NameRole.FIELD, fallback)

    def param_name(self, name: str) -> str:
        return self.sanitize(name, NameRole.PARAMETER)

    def operation_id(self, name: str) -> str:
        return self.sanitize(name, NameRole.OPERATION)

    def tag_name(self, name: str) -> str:
        return self.sanitize(name, NameRole.TAG)


def is_legal_identifier(
    name: str, reserved_words: Iterable[str] = (), max_length: int = MAX_IDENTIFIER_LENGTH
) -> bool:
    """Check that a name is usable as an identifier as-is."""
    if not name or len(name) > max_length:
        return False
    if not re.fullmatch(r"[A-Za-z][A-Za-z0-9_]*", name):
        return False
    return name.lower() not in {w.lower() for w in reserved_words}
