"""
ER Diagram Visualization Module - Renders a parsed Schema using Graphviz
"""
import logging
import os
from typing import Set

import graphviz

from .er_model import Schema, Table, Relation

logger = logging.getLogger(__name__)


class ERDiagramRenderer:
    """Renders ER diagrams using Graphviz"""

    def __init__(self, name: str = "ER_Diagram", output_format: str = "png"):
        self.dot = graphviz.Digraph(name, format=output_format)
        self.dot.attr(rankdir="TB")  # Top to bottom layout
        self.dot.attr("node", fontname="Arial", fontsize="10")
        self.dot.attr("edge", arrowsize="0.7", penwidth="1.2")
        self._placeholders: Set[str] = set()

    def render_tables(self, schema: Schema):
        """Render tables and their columns"""
        for table in schema.tables:
            self._render_table(table)

    def _render_table(self, table: Table):
        # Invisible cluster keeps a table next to its columns
        with self.dot.subgraph(name=f"cluster_{table.name}") as sub:
            sub.attr(label="", style="invis")

            sub.node(
                table.name,
                shape="box",
                style="filled",
                fillcolor="lightblue",
                label=table.name
            )

            for column in table.columns:
                column_id = f"{table.name}_{column.name}"

                if column.is_primary_key:
                    sub.node(
                        column_id,
                        label=f"{column.name}\\n[PK]",
                        shape="ellipse",
                        style="filled",
                        fillcolor="lightyellow",
                        fontcolor="red",
                        penwidth="2"
                    )
                elif column.is_foreign_key:
                    sub.node(
                        column_id,
                        label=f"{column.name}\\n[FK]",
                        shape="ellipse",
                        style="filled",
                        fillcolor="white",
                        fontcolor="blue"
                    )
                else:
                    sub.node(
                        column_id,
                        label=column.name,
                        shape="ellipse",
                        style="filled",
                        fillcolor="white"
                    )

                sub.edge(table.name, column_id, dir="none")

    def render_relations(self, schema: Schema):
        """Render relations between tables"""
        for i, rel in enumerate(schema.relations):
            if schema.get_table(rel.to_table) is None:
                self._render_placeholder(rel.to_table)
            self._render_relation(i, rel)

    def _render_placeholder(self, table_name: str):
        """Dashed node for a referenced table that the schema never declares"""
        if table_name in self._placeholders:
            return
        logger.debug("Relation target %s is not declared, drawing placeholder", table_name)
        self._placeholders.add(table_name)
        self.dot.node(
            table_name,
            shape="box",
            style="dashed",
            fontcolor="gray40",
            label=f"{table_name}\\n(not declared)"
        )

    def _render_relation(self, index: int, rel: Relation):
        rel_node = f"rel_{index}"

        self.dot.node(
            rel_node,
            shape="diamond",
            style="filled",
            fillcolor="lightgreen",
            label=rel.cardinality.value,
            fontsize="9",
            width="0.8",
            height="0.6"
        )

        self.dot.edge(
            rel.from_table,
            rel_node,
            dir="none",
            label=rel.from_column
        )

        self.dot.edge(
            rel_node,
            rel.to_table,
            dir="none",
            label=f"→{rel.to_column}"
        )

    def save(self, filename: str = "er_diagram", output_dir: str = "output", view: bool = True) -> str:
        """Save the diagram to file, returning the path of the rendered image"""
        output_path = os.path.join(output_dir, filename)
        return self.dot.render(output_path, view=view, cleanup=True)


def render_er_diagram(schema: Schema,
                      output_name: str = "er_diagram",
                      output_dir: str = "output",
                      view: bool = True) -> str:
    """
    Convenience function to render an ER diagram

    Args:
        schema: Parsed schema
        output_name: Output filename (without extension)
        output_dir: Directory receiving the image
        view: Whether to open the diagram after rendering

    Returns:
        Path to the generated image file
    """
    renderer = ERDiagramRenderer(output_name)
    renderer.render_tables(schema)
    renderer.render_relations(schema)
    return renderer.save(output_name, output_dir, view)
