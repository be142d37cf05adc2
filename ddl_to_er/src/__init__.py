"""
DDL to ER Diagram Converter Package
"""
from .sql_parser import parse_sql, parse_sql_strict, ClauseKind

from .er_model import Cardinality, Column, Table, Relation, Schema
from .exceptions import DdlToErError, NoTablesFoundError, VisionServiceError, VisionNotConfiguredError
from .visualization import render_er_diagram, ERDiagramRenderer

__all__ = [
    'parse_sql',
    'parse_sql_strict',
    'ClauseKind',
    'Cardinality',
    'Column',
    'Table',
    'Relation',
    'Schema',
    'DdlToErError',
    'NoTablesFoundError',
    'VisionServiceError',
    'VisionNotConfiguredError',
    'render_er_diagram',
    'ERDiagramRenderer'
]
