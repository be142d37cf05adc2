from unittest import mock

import graphviz

from ddl_to_er.src import parse_sql, render_er_diagram, ERDiagramRenderer


def build_renderer(schema):
    renderer = ERDiagramRenderer("test")
    renderer.render_tables(schema)
    renderer.render_relations(schema)
    return renderer


def test_renders_tables_columns_and_relations(ecommerce_sql):
    source = build_renderer(parse_sql(ecommerce_sql)).dot.source

    assert "cluster_users" in source
    assert "order_items_product_id" in source
    assert "[PK]" in source
    assert "[FK]" in source
    assert source.count("shape=diamond") == 5
    assert "not declared" not in source


def test_missing_relation_target_gets_single_placeholder():
    schema = parse_sql("CREATE TABLE a (x_id INT REFERENCES ghosts(id), "
                       "y_id INT REFERENCES ghosts(id));")
    source = build_renderer(schema).dot.source

    assert source.count("(not declared)") == 1
    assert "style=dashed" in source


def test_render_er_diagram_writes_to_output_dir(tmp_path, ecommerce_sql):
    expected = str(tmp_path / "shop.png")
    with mock.patch.object(graphviz.Digraph, "render", return_value=expected) as render:
        path = render_er_diagram(parse_sql(ecommerce_sql), "shop", str(tmp_path), view=False)

    assert path == expected
    render.assert_called_once_with(str(tmp_path / "shop"), view=False, cleanup=True)
