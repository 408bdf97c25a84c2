"""Unit tests for module address resolution."""

import pytest

from exportgraph.core.config import DEFAULT_EXTENSIONS
from exportgraph.languages.resolution import is_relative, resolve_module_address

KNOWN = {
    "src/index.js",
    "src/utils.ts",
    "src/components/index.tsx",
    "src/components/Button.jsx",
    "lib/helpers.js",
}


def resolve(importer: str, specifier: str) -> str:
    return resolve_module_address(importer, specifier, KNOWN, DEFAULT_EXTENSIONS)


class TestResolveModuleAddress:
    """Tests for resolve_module_address."""

    def test_exact_path(self) -> None:
        assert resolve("src/index.js", "./utils.ts") == "src/utils.ts"

    def test_added_extension(self) -> None:
        assert resolve("src/index.js", "./utils") == "src/utils.ts"

    def test_index_file(self) -> None:
        assert resolve("src/index.js", "./components") == "src/components/index.tsx"

    def test_parent_directory(self) -> None:
        assert resolve("src/components/Button.jsx", "../../lib/helpers") == "lib/helpers.js"

    def test_extension_swap(self) -> None:
        assert resolve("src/index.js", "./utils.js") == "src/utils.ts"

    def test_bare_specifier_unchanged(self) -> None:
        assert resolve("src/index.js", "react") == "react"
        assert resolve("src/index.js", "@scope/pkg/sub") == "@scope/pkg/sub"

    def test_unknown_relative_is_normalized(self) -> None:
        assert resolve("src/index.js", "./missing/../gone") == "src/gone"

    def test_root_file(self) -> None:
        assert resolve_module_address("a.js", "./b.js", {"b.js"}) == "b.js"


class TestIsRelative:
    """Tests for is_relative."""

    @pytest.mark.parametrize("specifier", ["./a", "../a", ".", ".."])
    def test_relative(self, specifier: str) -> None:
        assert is_relative(specifier)

    @pytest.mark.parametrize("specifier", ["a", "@scope/a", "/abs/a", ".hidden"])
    def test_not_relative(self, specifier: str) -> None:
        assert not is_relative(specifier)
