from collections.abc import Callable

import pytest

from napi_binding_generator.batch_driver import BatchDriver
from napi_binding_generator.models import MethodSignature
from napi_binding_generator.parsing.signature_parser import SignatureParser
from napi_binding_generator.type_registry import TypeRegistry
from napi_binding_generator.utils import TemplateRenderer


@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def registry() -> TypeRegistry:
    return TypeRegistry()


@pytest.fixture
def parser(registry: TypeRegistry) -> SignatureParser:
    return SignatureParser(registry)


@pytest.fixture
def parse(parser: SignatureParser) -> Callable[[str], MethodSignature]:
    def _parse(signature: str) -> MethodSignature:
        return parser.parse(f"// TODO: {signature}")

    return _parse


@pytest.fixture
def driver(renderer: TemplateRenderer) -> BatchDriver:
    return BatchDriver(renderer)


@pytest.fixture
def make_block() -> Callable[..., str]:
    def _make_block(*signatures: str, header: str = "// CLASS: Foo") -> str:
        lines = [header, *(f"// TODO: {s}" for s in signatures)]
        return "\n".join(lines) + "\n"

    return _make_block
