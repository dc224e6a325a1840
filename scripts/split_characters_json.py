#!/usr/bin/env python3
"""
Split a JSON dump of characters into one YAML file per character.

This script reads a JSON array of character records (the shape the
roster app ships with) and writes data/characters/<id>.yaml for each one.

Usage:
    python scripts/split_characters_json.py resources/characters.json

The script will:
1. Validate every record against the Character model
2. Write YAML files in data/characters/
3. Skip characters that already have YAML files (unless --overwrite is passed)
"""

import argparse
import json
import re
import sys
from datetime import date
from pathlib import Path

import yaml
from pydantic import ValidationError

from team_stats.models import Character


def create_file_stem(character_id: str) -> str:
    """Create a safe file name from a character ID."""
    stem = re.sub(r"[^\w-]+", "-", character_id)
    stem = re.sub(r"-+", "-", stem)
    return stem.strip("-") or "character"


def generate_yaml(character: Character) -> str:
    """Generate YAML content for a validated character."""
    data = character.model_dump(
        mode="json", by_alias=True, exclude_none=True, exclude_defaults=True
    )

    header = [
        f"# Character: {character.name or character.id}",
        f"# Split from JSON dump on {date.today().isoformat()}",
        "",
    ]
    body = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
    return "\n".join(header) + body


def main():
    parser = argparse.ArgumentParser(description="Split a character JSON dump into YAML files")
    parser.add_argument("json_path", type=Path, help="JSON file holding a list of characters")
    parser.add_argument("--overwrite", action="store_true",
                        help="Overwrite existing YAML files")
    parser.add_argument("--dry-run", action="store_true",
                        help="Print what would be done without writing files")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Output directory (default: data/characters)")
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    output_dir = args.output_dir or project_root / "data" / "characters"

    if not args.json_path.exists():
        print(f"ERROR: JSON file not found: {args.json_path}")
        return 1

    with open(args.json_path, encoding="utf-8") as f:
        records = json.load(f)

    if not isinstance(records, list):
        print("ERROR: Expected a JSON array of characters")
        return 1

    print(f"Found {len(records)} characters in JSON")
    output_dir.mkdir(parents=True, exist_ok=True)

    created = 0
    skipped = 0
    errors = 0
    owners: dict[str, str] = {}  # file stem -> character ID

    for index, record in enumerate(records):
        try:
            character = Character.model_validate(record)
        except ValidationError as e:
            print(f"  ERROR: record #{index} - {e.error_count()} validation error(s)")
            errors += 1
            continue

        stem = create_file_stem(character.id)
        if stem in owners:
            print(f"  ERROR: {character.id} maps to {stem}.yaml, already used by {owners[stem]}")
            errors += 1
            continue
        owners[stem] = character.id

        output_path = output_dir / f"{stem}.yaml"

        if output_path.exists() and not args.overwrite:
            print(f"  SKIP: {character.id} (already exists)")
            skipped += 1
            continue

        if args.dry_run:
            print(f"  WOULD CREATE: {output_path.name}")
        else:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(generate_yaml(character))
            print(f"  CREATED: {output_path.name}")

        created += 1

    print(f"\nSummary:")
    print(f"  Created: {created}")
    print(f"  Skipped: {skipped}")
    print(f"  Errors: {errors}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
