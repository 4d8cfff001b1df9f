from __future__ import annotations

import pytest

from webbundle.readers import PrefixGeneratorRegistry
from webbundle.variants import VariantResolver, VariantSet, all_variant_keys, variant_path_name


def test_single_axis_keys_skip_default() -> None:
    locale = VariantSet.of("locale", ["", "en", "fr"])

    assert locale.default == ""
    assert all_variant_keys([locale]) == ("en", "fr")


def test_cross_product_follows_declaration_order() -> None:
    locale = VariantSet.of("locale", ["", "en_GB"])
    device = VariantSet.of("device", ["desktop", "mobile"])

    assert device.default == "desktop"
    assert all_variant_keys([locale, device]) == ("|mobile", "en_GB|desktop", "en_GB|mobile")


def test_no_variant_sets_means_no_keys() -> None:
    assert all_variant_keys([]) == ()


def test_invalid_variant_sets_are_rejected() -> None:
    with pytest.raises(ValueError, match="at least one value"):
        VariantSet(axis="locale", values=())
    with pytest.raises(ValueError, match="not declared"):
        VariantSet(axis="locale", values=("en",), default="fr")
    with pytest.raises(ValueError, match="duplicate"):
        VariantSet(axis="locale", values=("en", "en"), default="en")
    with pytest.raises(ValueError, match="at most once"):
        VariantResolver(
            PrefixGeneratorRegistry(),
            [VariantSet.of("locale", ["", "en"]), VariantSet.of("locale", ["", "fr"])],
        )


def test_best_match_falls_back_through_locale_segments() -> None:
    locale = VariantSet.of("locale", ["", "fr", "en_GB"])

    assert locale.best_match("fr_CA") == "fr"
    assert locale.best_match("en_GB_scouse") == "en_GB"
    assert locale.best_match("en_US") == ""
    assert locale.best_match(None) == ""


def test_context_round_trips_through_key() -> None:
    resolver = VariantResolver(
        PrefixGeneratorRegistry(),
        [VariantSet.of("locale", ["", "fr"]), VariantSet.of("device", ["", "mobile"])],
    )

    assert resolver.context_for_key("fr|mobile") == {"locale": "fr", "device": "mobile"}
    with pytest.raises(KeyError):
        resolver.context_for_key("de|mobile")


def test_variant_path_names() -> None:
    assert variant_path_name("messages:app", "fr", generated=True) == "messages:app@fr"
    assert variant_path_name("/js/app.js", "fr", generated=False) == "/js/app@fr.js"
    assert variant_path_name("/js.d/app", "fr", generated=False) == "/js.d/app@fr"
    assert variant_path_name("/js/app.js", "", generated=False) == "/js/app.js"
