from __future__ import annotations

from webbundle.paths import as_dir_path, as_path, file_name, join_paths, normalize_path


def test_as_path_adds_single_leading_separator() -> None:
    assert as_path("js/app.js") == "/js/app.js"
    assert as_path("//js//app.js") == "/js/app.js"


def test_as_path_folds_redundant_segments() -> None:
    assert as_path("/js/./lib/../app.js") == "/js/app.js"
    assert as_path("../../app.js") == "/app.js"


def test_backslash_and_slash_inputs_normalize_identically() -> None:
    assert as_path(r"js\lib\a.js") == as_path("js/lib/a.js")


def test_as_dir_path_has_leading_and_trailing_separator() -> None:
    assert as_dir_path("bundles") == "/bundles/"
    assert as_dir_path("/bundles//") == "/bundles/"
    assert as_dir_path("") == "/"


def test_join_paths_normalizes_plain_paths() -> None:
    assert join_paths("/lib/", "a.js") == "/lib/a.js"
    assert join_paths("lib", "/sub/a.js") == "/lib/sub/a.js"


def test_join_paths_keeps_generated_prefix_verbatim() -> None:
    assert join_paths("jar:com/lib/", "a.js", generated=True) == "jar:com/lib/a.js"
    assert join_paths("messages:", "app", generated=True) == "messages:app"
    assert join_paths("jar:com/lib", "a.js", generated=True) == "jar:com/lib/a.js"


def test_normalize_path_and_file_name() -> None:
    assert normalize_path("/a/b/") == "a/b"
    assert file_name("/a/b/c.js") == "c.js"
    assert file_name("/a/b/") == "b"
