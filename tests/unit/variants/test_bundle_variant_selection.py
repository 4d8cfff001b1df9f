from __future__ import annotations

from webbundle.readers import PrefixGeneratorRegistry
from webbundle.variants import VariantResolver, VariantSet


def _resolver(*variant_sets: VariantSet) -> VariantResolver:
    return VariantResolver(PrefixGeneratorRegistry(), variant_sets)


def test_empty_context_or_undeclared_bundle_has_no_key() -> None:
    declared = _resolver(VariantSet.of("locale", ["", "fr"]))

    assert declared.select_bundle_variant_key(None) is None
    assert declared.select_bundle_variant_key({}) is None
    assert _resolver().select_bundle_variant_key({"locale": "fr"}) is None


def test_undeclared_axes_are_dropped() -> None:
    resolver = _resolver(VariantSet.of("locale", ["", "fr"]))

    assert resolver.select_bundle_variant_key({"browser": "ie"}) is None
    assert resolver.select_bundle_variant_key({"browser": "ie", "locale": "fr"}) == "fr"


def test_most_specific_locale_wins() -> None:
    resolver = _resolver(VariantSet.of("locale", ["", "en", "en_GB"]))

    assert resolver.select_bundle_variant_key({"locale": "en_GB"}) == "en_GB"
    assert resolver.select_bundle_variant_key({"locale": "en_US"}) == "en"
    assert resolver.select_bundle_variant_key({"locale": "de"}) is None


def test_multi_axis_key_is_composed_in_declaration_order() -> None:
    resolver = _resolver(
        VariantSet.of("locale", ["", "en_GB"]),
        VariantSet.of("device", ["", "mobile"]),
    )

    assert resolver.select_bundle_variant_key({"device": "mobile", "locale": "en_GB"}) == (
        "en_GB|mobile"
    )
    assert resolver.select_bundle_variant_key({"device": "mobile"}) == "|mobile"
    assert resolver.select_bundle_variant_key({"locale": "en_GB"}) == "en_GB|"


def test_selected_keys_are_declared_keys() -> None:
    resolver = _resolver(
        VariantSet.of("locale", ["", "fr", "en"]),
        VariantSet.of("skin", ["light", "dark"]),
    )
    contexts = [
        {"locale": "fr_BE"},
        {"skin": "dark"},
        {"locale": "en", "skin": "purple"},
        {"locale": "xx", "skin": "dark"},
    ]

    for context in contexts:
        key = resolver.select_bundle_variant_key(context)
        assert key is None or key in resolver.variant_keys


def test_selection_is_stable_across_calls() -> None:
    resolver = _resolver(
        VariantSet.of("locale", ["", "fr"]),
        VariantSet.of("skin", ["light", "dark"]),
    )
    context = {"skin": "dark", "locale": "fr_CA"}

    keys = {resolver.select_bundle_variant_key(context) for _ in range(20)}

    assert keys == {"fr|dark"}
