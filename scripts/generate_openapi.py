"""Dump the form conversation API's OpenAPI schema.

Usage:
    python -m scripts.generate_openapi --output docs/openapi.json
"""

import argparse
import json
from pathlib import Path

from formchat.main import app


def write_schema(output: Path) -> int:
    """Write the schema to ``output`` and return the number of paths."""
    schema = app.openapi()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(schema, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    return len(schema["paths"])


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate the OpenAPI schema")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("openapi.json"),
        help="Destination file (default: openapi.json)",
    )
    args = parser.parse_args()

    paths = write_schema(args.output)
    print(f"Generated {args.output} ({paths} paths)")


if __name__ == "__main__":
    main()
