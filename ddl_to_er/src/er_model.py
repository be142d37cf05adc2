"""
ER Model Classes - Represent tables, columns, relations and the parsed schema
"""
from enum import Enum
from typing import List, Optional, Dict, Any, Tuple


class Cardinality(str, Enum):
    """Multiplicity of a relation between two tables"""

    ONE_TO_ONE = 'one-to-one'
    ONE_TO_MANY = 'one-to-many'
    MANY_TO_MANY = 'many-to-many'


class Column:
    """Represents a column of a table."""

    def __init__(self, name: str, data_type: str, is_primary_key: bool = False,
                 is_nullable: bool = True, references: Optional[Tuple[str, str]] = None):
        self.name = name
        self.data_type = data_type
        self.is_primary_key = is_primary_key
        self.is_nullable = is_nullable
        self.references = references

    @property
    def is_foreign_key(self) -> bool:
        return self.references is not None

    def set_reference(self, table: str, column: str):
        """Mark this column as a foreign key to table.column"""
        self.references = (table, column)

    def to_dict(self) -> Dict[str, Any]:
        """Converts the column to a dictionary."""
        data = {
            "name": self.name,
            "type": self.data_type,
            "isPrimaryKey": self.is_primary_key,
            "isForeignKey": self.is_foreign_key,
            "isNullable": self.is_nullable,
        }
        if self.references:
            data["references"] = {
                "table": self.references[0],
                "column": self.references[1],
            }
        return data

    def __eq__(self, other):
        if not isinstance(other, Column):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        pk_str = " [PK]" if self.is_primary_key else ""
        fk_str = f" -> {self.references[0]}.{self.references[1]}" if self.references else ""
        return f"Column(name={self.name}{pk_str}, type={self.data_type}{fk_str})"


class Table:
    """Represents a table (entity) in the ER diagram"""

    def __init__(self, name: str):
        self.name = name
        self.columns: List[Column] = []

    def add_column(self, column: Column):
        """Append a column, keeping declaration order"""
        self.columns.append(column)

    def get_column(self, name: str) -> Optional[Column]:
        """Look a column up by name, None if the table has no such column"""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": [column.to_dict() for column in self.columns],
        }

    def __eq__(self, other):
        if not isinstance(other, Table):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Table(name={self.name}, columns={len(self.columns)})"


class Relation:
    """Represents a relation between two table columns"""

    def __init__(self, from_table: str, from_column: str,
                 to_table: str, to_column: str,
                 cardinality: Cardinality = Cardinality.ONE_TO_MANY):
        self.from_table = from_table
        self.from_column = from_column
        self.to_table = to_table
        self.to_column = to_column
        self.cardinality = cardinality

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": {"table": self.from_table, "column": self.from_column},
            "to": {"table": self.to_table, "column": self.to_column},
            "type": self.cardinality.value,
        }

    def __eq__(self, other):
        if not isinstance(other, Relation):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"Relation({self.from_table}.{self.from_column} -> "
                f"{self.to_table}.{self.to_column}, type={self.cardinality.value})")


class Schema:
    """Parsed result: tables in discovery order plus every relation found"""

    def __init__(self, tables: Optional[List[Table]] = None,
                 relations: Optional[List[Relation]] = None):
        self.tables: List[Table] = tables if tables is not None else []
        self.relations: List[Relation] = relations if relations is not None else []

    def get_table(self, name: str) -> Optional[Table]:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def has_column(self, table_name: str, column_name: str) -> bool:
        """Whether table_name.column_name exists in this schema"""
        table = self.get_table(table_name)
        return table is not None and table.get_column(column_name) is not None

    def is_empty(self) -> bool:
        return not self.tables

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tables": [table.to_dict() for table in self.tables],
            "relations": [relation.to_dict() for relation in self.relations],
        }

    def __eq__(self, other):
        if not isinstance(other, Schema):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Schema(tables={len(self.tables)}, relations={len(self.relations)})"
