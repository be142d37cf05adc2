"""
DDL to ER - turns CREATE TABLE statements into entity-relationship schemas
"""
__version__ = "1.0.0"
