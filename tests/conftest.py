import json
from pathlib import Path

import pytest

from matlab_codegen.core.naming import TruncationRegistry
from matlab_codegen.core.schema import schemas_from_components
from matlab_codegen.languages.matlab import MatlabTransformer, create_matlab_sanitizer
from matlab_codegen.languages.matlab.types import MatlabTypeMapper

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def registry():
    return TruncationRegistry()


@pytest.fixture
def sanitizer(registry):
    return create_matlab_sanitizer(registry)


@pytest.fixture
def mapper(sanitizer):
    return MatlabTypeMapper(sanitizer, "PetStore")


@pytest.fixture
def transformer():
    return MatlabTransformer()


@pytest.fixture
def petstore():
    with open(FIXTURES / "petstore.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def petstore_schemas(petstore):
    return schemas_from_components(petstore)
