#!/usr/bin/env python3
"""
DDL to ER Diagram Converter - Main Program
Converts SQL CREATE TABLE statements to Entity-Relationship schemas and diagrams
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from .src import parse_sql_strict, render_er_diagram, NoTablesFoundError, Schema


def print_summary(schema: Schema):
    """Print tables, columns and relations in a readable form"""
    print(f"✅ Found {len(schema.tables)} table(s):")
    for table in schema.tables:
        print(f"   - {table.name}")
        for column in table.columns:
            flags = []
            if column.is_primary_key:
                flags.append("PK")
            if column.is_foreign_key:
                flags.append(f"FK -> {column.references[0]}.{column.references[1]}")
            if not column.is_nullable:
                flags.append("NOT NULL")
            flag_str = f" [{', '.join(flags)}]" if flags else ""
            print(f"       {column.name}: {column.data_type}{flag_str}")

    print(f"\n🔗 {len(schema.relations)} relation(s):")
    for rel in schema.relations:
        print(f"   - {rel.from_table}.{rel.from_column} -> "
              f"{rel.to_table}.{rel.to_column} ({rel.cardinality.value})")


def sql_to_er(sql_content: str, output_name: str = "er_diagram", output_dir: str = "output",
              render: bool = False, view: bool = True, as_json: bool = False):
    """
    Convert SQL to an ER schema, optionally rendering a diagram

    Args:
        sql_content: SQL string containing CREATE TABLE statements
        output_name: Output filename (without extension)
        output_dir: Directory receiving the rendered image
        render: Whether to render a Graphviz diagram
        view: Whether to open the diagram after rendering
        as_json: Print the schema as JSON instead of a summary

    Returns:
        The parsed Schema, or None when no table was found
    """
    try:
        schema = parse_sql_strict(sql_content)
    except NoTablesFoundError as e:
        print(f"❌ {e}", file=sys.stderr)
        return None

    if as_json:
        print(json.dumps(schema.to_dict(), indent=2))
    else:
        print_summary(schema)

    if render:
        output_path = render_er_diagram(schema, output_name, output_dir, view)
        print(f"\n✅ ER diagram saved to: {output_path}", file=sys.stderr if as_json else sys.stdout)

    return schema


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert SQL CREATE TABLE statements to ER schemas and diagrams"
    )
    parser.add_argument(
        "input",
        help="SQL file path or '-' for stdin"
    )
    parser.add_argument(
        "-o", "--output",
        default="er_diagram",
        help="Output filename (without extension)"
    )
    parser.add_argument(
        "-d", "--output-dir",
        default="output",
        help="Directory for rendered diagrams"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the parsed schema as JSON"
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Render a Graphviz diagram"
    )
    parser.add_argument(
        "--no-view",
        action="store_true",
        help="Don't open the diagram after rendering"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log skipped clauses and statements"
    )
    return parser


def main(argv=None):
    """Main entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    input_path = None
    if args.input != "-":
        input_path = Path(args.input)
        if not input_path.exists():
            print(f"❌ Error: File not found: {args.input}", file=sys.stderr)
            sys.exit(1)

    try:
        # Read SQL content
        if input_path is None:
            sql_content = sys.stdin.read()
        else:
            sql_content = input_path.read_text(encoding="utf-8")

        schema = sql_to_er(sql_content, args.output, args.output_dir,
                           render=args.render, view=not args.no_view, as_json=args.json)
    except Exception as e:
        print(f"\n❌ Error: {e}", file=sys.stderr)
        sys.exit(1)

    if schema is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
