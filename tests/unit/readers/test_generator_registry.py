from __future__ import annotations

import pytest

from webbundle.readers import PrefixGeneratorRegistry


def test_registered_prefix_marks_paths_generated() -> None:
    generators = PrefixGeneratorRegistry()
    generators.register("messages:", ["locale"])
    generators.register("jar:")

    assert generators.is_generated_path("messages:app.properties")
    assert generators.is_generated_path("/jar:com/lib.js")
    assert not generators.is_generated_path("/js/app.js")
    assert generators.prefixes() == ("messages:", "jar:")


def test_supported_axes_per_prefix() -> None:
    generators = PrefixGeneratorRegistry()
    generators.register("skin:", ["skin", "locale"])

    assert generators.supported_variant_axes("skin:theme.css") == frozenset({"skin", "locale"})
    assert generators.supported_variant_axes("/css/plain.css") == frozenset()


def test_empty_prefix_is_rejected() -> None:
    with pytest.raises(ValueError, match="non-empty"):
        PrefixGeneratorRegistry().register("")
