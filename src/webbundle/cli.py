"""Command line entrypoint: resolve configured bundles and print a snapshot."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TextIO

from webbundle.config import ConfigOverrides, load_effective_config
from webbundle.fingerprint import FingerprintNotReadyError
from webbundle.logging import JsonlBuildLogger
from webbundle.readers import FileSystemResourceReader, ResourceNotFoundError
from webbundle.registry import build_registry
from webbundle.resolver import BundleMappingError, SortFileReadError


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for the resolve command."""
    parser = argparse.ArgumentParser(prog="webbundle")
    parser.add_argument("--project-root", required=False, default=".")
    parser.add_argument("--resource-root", required=False, default=None)
    parser.add_argument("--data-dir", required=False, default=None)
    parser.add_argument("--debug", action="store_true", default=None)
    parser.add_argument("--fingerprint", action="store_true", default=False)
    parser.add_argument(
        "--variant",
        action="append",
        default=[],
        metavar="AXIS=VALUE",
        help="Variant context entry; may be repeated.",
    )
    return parser


def parse_variant_arguments(raw_items: list[str]) -> dict[str, str]:
    """Parse repeated AXIS=VALUE arguments into a variant context."""
    context: dict[str, str] = {}
    for item in raw_items:
        axis, separator, value = item.partition("=")
        if not separator or not axis.strip():
            raise ValueError(f"Variant argument '{item}' must use the form AXIS=VALUE.")
        context[axis.strip()] = value.strip()
    return context


def run(argv: list[str] | None = None, out_stream: TextIO | None = None) -> int:
    """Resolve bundles and write one sorted-key JSON document."""
    out = out_stream or sys.stdout
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    try:
        variants = parse_variant_arguments(args.variant)
        overrides = ConfigOverrides(
            resource_root=Path(args.resource_root) if args.resource_root is not None else None,
            data_dir=Path(args.data_dir) if args.data_dir is not None else None,
            debug=args.debug,
        )
        config = load_effective_config(Path(args.project_root), overrides)
        reader = FileSystemResourceReader(config.resources.root)
        logger = JsonlBuildLogger(path=config.data_dir / "build.jsonl")
        registry = build_registry(config, reader, logger=logger)
        if args.fingerprint:
            registry.fingerprint_all(reader)
    except (BundleMappingError, SortFileReadError, ResourceNotFoundError, ValueError) as exc:
        out.write(f"{json.dumps(_error_payload(exc), sort_keys=True)}\n")
        return 2

    bundles = registry.snapshot()
    for name in registry.names():
        bundle = registry.get(name)
        if bundle is None:
            continue
        entry = bundles[name]
        if isinstance(entry, dict):
            entry["serving_paths"] = [
                path.url_path for path in bundle.serving_paths(config.debug, variants)
            ]
            try:
                entry["url_prefix"] = bundle.url_prefix(variants)
            except FingerprintNotReadyError:
                entry["url_prefix"] = None
    payload = {
        "ok": True,
        "mode": "debug" if config.debug else "production",
        "variants": variants,
        "global_bundles": [bundle.name for bundle in registry.global_bundles()],
        "bundles": bundles,
    }
    out.write(f"{json.dumps(payload, sort_keys=True)}\n")
    return 0


def _error_payload(exc: Exception) -> dict[str, object]:
    code = "INVALID_CONFIG"
    details: dict[str, object] = {}
    if isinstance(exc, BundleMappingError):
        code = "MAPPING_ERROR"
        details = {"bundle": exc.bundle_name, "mapping": exc.mapping}
    elif isinstance(exc, SortFileReadError):
        code = "SORT_FILE_ERROR"
        details = {"bundle": exc.bundle_name, "path": exc.path}
    elif isinstance(exc, ResourceNotFoundError):
        code = "RESOURCE_NOT_FOUND"
        details = {"path": exc.path}
    return {"ok": False, "error": {"code": code, "message": str(exc), **details}}


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the webbundle command."""
    return run(argv)


if __name__ == "__main__":
    raise SystemExit(main())
