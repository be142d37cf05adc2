"""
Best-effort CREATE TABLE parser producing an ER schema
"""
import logging
import re
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .er_model import Cardinality, Column, Relation, Schema, Table
from .exceptions import NoTablesFoundError

logger = logging.getLogger(__name__)

QUOTE_CHARS = ('"', "'", '`')

# identifier, optionally quoted, with an optional schema qualifier in front
_IDENT = r'[`"\'‘’]?(\w+)[`"\'‘’]?'
_QUALIFIED_IDENT = r'(?:[`"\'‘’]?\w+[`"\'‘’]?\s*\.\s*)?' + _IDENT

_LINE_COMMENT_RE = re.compile(r'--[^\n]*')
_BLOCK_COMMENT_RE = re.compile(r'/\*.*?\*/', re.DOTALL)
_WHITESPACE_RE = re.compile(r'\s+')

_CREATE_TABLE_RE = re.compile(
    r'CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?' + _QUALIFIED_IDENT + r'\s*\(',
    re.IGNORECASE
)
_CONSTRAINT_NAME_RE = re.compile(r'^CONSTRAINT\s+' + _IDENT + r'\s*', re.IGNORECASE)
_COLUMN_HEAD_RE = re.compile(r'^' + _IDENT + r'\s+(\w+(?:\s*\([^)]*\))?)', re.IGNORECASE)
_INLINE_REFERENCES_RE = re.compile(
    r'\bREFERENCES\s+' + _QUALIFIED_IDENT + r'\s*\(\s*' + _IDENT + r'\s*\)',
    re.IGNORECASE
)
_FOREIGN_KEY_RE = re.compile(
    r'FOREIGN\s+KEY\s*\(([^)]*)\)\s*REFERENCES\s+' + _QUALIFIED_IDENT + r'\s*\(([^)]*)\)',
    re.IGNORECASE
)

# typographic double quotes sometimes pasted from documents or returned by the
# vision model; ’ stays as is since it is also used as an apostrophe in literals
_QUOTE_TRANSLATION = str.maketrans({
    '“': '"', '”': '"',
})


class ClauseKind(Enum):
    """What a top-level clause of a table body declares"""

    COLUMN = 'column'
    PRIMARY_KEY = 'primary key'
    FOREIGN_KEY = 'foreign key'
    UNIQUE = 'unique'
    CHECK = 'check'
    OTHER_CONSTRAINT = 'constraint'


_CLAUSE_PATTERNS = [
    (re.compile(r'^PRIMARY\s+KEY\b', re.IGNORECASE), ClauseKind.PRIMARY_KEY),
    (re.compile(r'^FOREIGN\s+KEY\b', re.IGNORECASE), ClauseKind.FOREIGN_KEY),
    (re.compile(r'^UNIQUE\b', re.IGNORECASE), ClauseKind.UNIQUE),
    (re.compile(r'^CHECK\b', re.IGNORECASE), ClauseKind.CHECK),
    # MySQL secondary indexes: KEY idx (...), INDEX idx (...), FULLTEXT KEY ...
    (re.compile(r'^(?:(?:FULLTEXT|SPATIAL)\s+)?(?:KEY|INDEX)\b', re.IGNORECASE),
     ClauseKind.OTHER_CONSTRAINT),
]


def parse_sql(sql: str) -> Schema:
    """
    Parse every CREATE TABLE statement in ``sql`` into a Schema.

    Never raises on malformed SQL: clauses that cannot be understood are
    dropped and input without any table yields an empty Schema.
    """
    schema = Schema()
    if not sql or not isinstance(sql, str):
        return schema

    text = preprocess(sql)
    for table_name, body in iter_create_tables(text):
        if schema.get_table(table_name) is not None:
            logger.warning("Duplicate CREATE TABLE %s ignored", table_name)
            continue
        table, relations = parse_table(table_name, body)
        schema.tables.append(table)
        schema.relations.extend(relations)

    logger.debug("Parsed %d table(s) and %d relation(s)",
                 len(schema.tables), len(schema.relations))
    return schema


def parse_sql_strict(sql: str) -> Schema:
    """Like parse_sql, but raise NoTablesFoundError for an empty result"""
    schema = parse_sql(sql)
    if schema.is_empty():
        raise NoTablesFoundError()
    return schema


def preprocess(sql: str) -> str:
    """Strip comments and collapse whitespace into single spaces"""
    sql = sql.translate(_QUOTE_TRANSLATION)
    sql = _LINE_COMMENT_RE.sub('', sql)
    sql = _BLOCK_COMMENT_RE.sub(' ', sql)
    return _WHITESPACE_RE.sub(' ', sql).strip()


def find_closing_paren(text: str, open_index: int, track_quotes: bool = True) -> Optional[int]:
    """
    Index of the parenthesis closing the one at ``open_index``.

    With ``track_quotes``, parentheses inside quoted literals are not
    counted and a backslash escapes the next character of a literal.
    Returns None when the group is never closed.
    """
    depth = 0
    quote_char = None
    escaped = False

    for i in range(open_index, len(text)):
        char = text[i]

        if quote_char:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == quote_char:
                quote_char = None
            continue

        if track_quotes and char in QUOTE_CHARS:
            quote_char = char
        elif char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth == 0:
                return i

    return None


def iter_create_tables(text: str) -> Iterator[Tuple[str, str]]:
    """Yield (table_name, body) for each CREATE TABLE statement in normalized text"""
    pos = 0
    while True:
        match = _CREATE_TABLE_RE.search(text, pos)
        if not match:
            return

        table_name = match.group(1)
        open_index = match.end() - 1
        close_index = find_closing_paren(text, open_index)
        if close_index is None:
            # a stray quote in a literal hides the real closing paren
            close_index = find_closing_paren(text, open_index, track_quotes=False)

        if close_index is None:
            logger.warning("Unbalanced parentheses in CREATE TABLE %s, statement skipped",
                           table_name)
            pos = match.end()
            continue

        yield table_name, text[open_index + 1:close_index]
        # table options after the body (ENGINE=..., ;) are skipped by the next search
        pos = close_index + 1


def split_clauses(body: str, track_quotes: bool = True) -> List[str]:
    """Split a table body at top-level commas, keeping nested groups intact"""
    parts = []
    current = []
    depth = 0
    quote_char = None
    escaped = False

    for char in body:
        if quote_char:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == quote_char:
                quote_char = None
        elif track_quotes and char in QUOTE_CHARS:
            quote_char = char
        elif char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
        elif char == ',' and depth == 0:
            parts.append(''.join(current).strip())
            current = []
            continue

        current.append(char)

    if quote_char:
        # unterminated literal swallowed the remaining clauses
        return split_clauses(body, track_quotes=False)

    parts.append(''.join(current).strip())
    return [part for part in parts if part]


def classify_clause(clause: str) -> ClauseKind:
    """Decide whether a clause is a column definition or a table-level constraint"""
    text = clause.strip()

    named = _CONSTRAINT_NAME_RE.match(text)
    if named:
        text = text[named.end():]

    for pattern, kind in _CLAUSE_PATTERNS:
        if pattern.match(text):
            return kind

    return ClauseKind.OTHER_CONSTRAINT if named else ClauseKind.COLUMN


def parse_column_definition(clause: str) -> Optional[Column]:
    """Build a Column from a column clause, or None if its head is not name + type"""
    col_match = _COLUMN_HEAD_RE.match(clause.strip())
    if not col_match:
        return None

    upper_clause = clause.upper()
    is_primary_key = 'PRIMARY KEY' in upper_clause

    column = Column(
        name=col_match.group(1),
        data_type=_WHITESPACE_RE.sub('', col_match.group(2)).upper(),
        is_primary_key=is_primary_key,
        is_nullable=not is_primary_key and 'NOT NULL' not in upper_clause,
    )

    ref_match = _INLINE_REFERENCES_RE.search(clause)
    if ref_match:
        column.set_reference(ref_match.group(1), ref_match.group(2))

    return column


def parse_foreign_key_constraint(clause: str) -> List[Tuple[str, str, str]]:
    """
    Extract (local_column, ref_table, ref_column) triples from a table-level
    FOREIGN KEY clause. Composite keys are paired by position; a missing
    referenced column falls back to the local column's name.
    """
    fk_match = _FOREIGN_KEY_RE.search(clause)
    if not fk_match:
        return []

    local_cols = _split_identifier_list(fk_match.group(1))
    ref_table = fk_match.group(2)
    ref_cols = _split_identifier_list(fk_match.group(3))

    return [
        (local_col, ref_table, ref_cols[i] if i < len(ref_cols) else local_col)
        for i, local_col in enumerate(local_cols)
    ]


def resolve_foreign_key(table: Table, column_name: str, ref_table: str, ref_column: str) -> bool:
    """Mark table.column_name as referencing ref_table.ref_column; False if no such column"""
    column = table.get_column(column_name)
    if column is None:
        logger.debug("FOREIGN KEY on unknown column %s.%s left unresolved",
                     table.name, column_name)
        return False

    column.set_reference(ref_table, ref_column)
    return True


def synthesize_relation(table_name: str, column_name: str,
                        ref_table: str, ref_column: str) -> Relation:
    """Every foreign key is recorded as one-to-many"""
    return Relation(table_name, column_name, ref_table, ref_column,
                    cardinality=Cardinality.ONE_TO_MANY)


def parse_table(table_name: str, body: str) -> Tuple[Table, List[Relation]]:
    """Parse one table body into a Table and the relations it declares"""
    table = Table(table_name)
    relations = []
    pending_keys = []

    for clause in split_clauses(body):
        kind = classify_clause(clause)

        if kind is ClauseKind.COLUMN:
            column = parse_column_definition(clause)
            if column is None:
                logger.debug("Unrecognized clause in table %s dropped: %s", table_name, clause)
                continue
            if table.get_column(column.name) is not None:
                logger.warning("Duplicate column %s.%s ignored", table_name, column.name)
                continue

            table.add_column(column)
            if column.references:
                relations.append(synthesize_relation(table_name, column.name, *column.references))

        elif kind is ClauseKind.FOREIGN_KEY:
            for local_col, ref_table, ref_col in parse_foreign_key_constraint(clause):
                pending_keys.append((local_col, ref_table, ref_col))
                relations.append(synthesize_relation(table_name, local_col, ref_table, ref_col))

        else:
            logger.debug("Ignoring %s constraint in table %s", kind.value, table_name)

    # columns may be declared after the constraint that references them
    for local_col, ref_table, ref_col in pending_keys:
        resolve_foreign_key(table, local_col, ref_table, ref_col)

    return table, relations


def _split_identifier_list(text: str) -> List[str]:
    names = [name.strip().strip('`"\'') for name in text.split(',')]
    return [name for name in names if name]
