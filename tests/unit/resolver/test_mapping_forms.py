from __future__ import annotations

import pytest

from webbundle.readers import InMemoryResourceReader, PrefixGeneratorRegistry
from webbundle.resolver import (
    BundleMappingError,
    MappingKind,
    PathMappingResolver,
    normalize_extension,
    parse_mapping,
)


def _generators() -> PrefixGeneratorRegistry:
    generators = PrefixGeneratorRegistry()
    generators.register("messages:", ["locale"])
    return generators


def _parse(raw: str):
    return parse_mapping(
        raw,
        bundle_name="app",
        file_extension=".js",
        licenses_file_name=".license",
        generators=_generators(),
    )


def test_mapping_kinds_are_classified() -> None:
    assert _parse("js/lib/").kind is MappingKind.DIRECTORY
    assert _parse("js/lib/**").kind is MappingKind.RECURSIVE_DIRECTORY
    assert _parse("js/lib/**").path == "js/lib/"
    assert _parse("js/app.js").kind is MappingKind.FILE
    assert _parse("messages:app").kind is MappingKind.GENERATED
    assert _parse("js/.license").kind is MappingKind.LICENSE


def test_unrecognized_mapping_names_mapping_and_bundle() -> None:
    with pytest.raises(BundleMappingError, match=r"Wrong mapping \[js/app.css\] for bundle \[app\]") as error:
        _parse("js/app.css")

    assert error.value.mapping == "js/app.css"
    assert error.value.bundle_name == "app"


def test_wrong_mapping_aborts_whole_pass() -> None:
    reader = InMemoryResourceReader({"js/a.js": "a"})
    resolver = PathMappingResolver(
        bundle_name="app",
        reader=reader,
        generators=_generators(),
        file_extension="js",
    )

    with pytest.raises(BundleMappingError):
        resolver.resolve(["js/a.js", "js/readme.txt"])


def test_file_and_generated_mappings_keep_declaration_order() -> None:
    resolver = PathMappingResolver(
        bundle_name="app",
        reader=InMemoryResourceReader(),
        generators=_generators(),
        file_extension=".js",
    )

    resolved = resolver.resolve(["js//b.js", "messages:app", "./js/a.js"])

    assert [entry.path for entry in resolved.production_paths] == [
        "/js/b.js",
        "messages:app",
        "/js/a.js",
    ]


def test_normalize_extension() -> None:
    assert normalize_extension("js") == ".js"
    assert normalize_extension(".css") == ".css"
    assert normalize_extension(None) == ""
