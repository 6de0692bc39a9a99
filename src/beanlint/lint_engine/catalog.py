from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel

from .registry import registry

# Ensure built-in lints are imported/registered when generating a catalog.
from . import lints as _builtin_lints  # noqa: F401


class LintCatalogEntry(BaseModel):
    lint_id: str
    lint_title: str
    description: str = ""
    default_severity: str

    module: str
    class_name: str

    config_model: str
    config_schema: Dict[str, Any]


def build_catalog() -> List[LintCatalogEntry]:
    entries: List[LintCatalogEntry] = []
    for lint_cls in registry.values():
        cfg_model = lint_cls.config_model
        entries.append(
            LintCatalogEntry(
                lint_id=lint_cls.lint_id,
                lint_title=getattr(lint_cls, "lint_title", ""),
                description=getattr(lint_cls, "description", ""),
                default_severity=lint_cls.default_severity.value,
                module=getattr(lint_cls, "__module__", ""),
                class_name=getattr(lint_cls, "__name__", ""),
                config_model=cfg_model.__name__,
                config_schema=cfg_model.model_json_schema(),
            )
        )

    entries.sort(key=lambda e: e.lint_id)
    return entries


def dump_catalog(fmt: str = "yaml") -> str:
    catalog = [e.model_dump() for e in build_catalog()]
    if fmt == "json":
        return json.dumps(catalog, indent=2, sort_keys=True)
    return yaml.safe_dump(catalog, sort_keys=True)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate a lint catalog from the registry.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)
    print(dump_catalog(args.format))


if __name__ == "__main__":
    main()
