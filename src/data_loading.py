"""
data_loading.py
----------------

This module reads the raw layoffs dataset and writes the cleaned result.
It implements the first (Load) and last (Emit) stages of the pipeline.

A store is either:
- a CSV file (any location ending in ".csv"), or
- a database table reached through a SQLAlchemy URL, for example
  "sqlite:///world_layoffs.db" or "mysql+pymysql://user:pw@host/world_layoffs".

Loading always normalizes the raw table into the same shape: the nine
schema columns in order, literal "NULL" placeholders turned into missing
values, and the integer measurement columns coerced to nullable integers.

Any failure talking to the storage substrate is raised as `StorageError`.
"""

# ============================================================
# IMPORTS
# ============================================================

import os
import pandas as pd
import sqlalchemy as sa
from sqlalchemy import event

from src.column_cleaning import coerce_integer_columns, replace_null_tokens
from src.utils import require_columns, stage_stats, with_config


STAGING_SUFFIX = "__staging"


class StorageError(RuntimeError):
    """Reading from or writing to a store failed."""


# ============================================================
# STORE RESOLUTION
# ============================================================

def resolve_store(location):
    """
    Classify a store location.

    Parameters
    ----------
    location : str or os.PathLike

    Returns
    -------
    str
        "csv" for paths ending in .csv, "sql" for anything that looks like
        a SQLAlchemy URL ("dialect://...").

    Raises
    ------
    ValueError
        If the location is neither.
    """
    location = os.fspath(location)

    if location.lower().endswith(".csv"):
        return "csv"
    if "://" in location:
        return "sql"

    raise ValueError(
        f"Unrecognized store '{location}': expected a .csv path or a database URL."
    )


def _table_name(table, config, key):
    return table if table is not None else with_config(config, key)


def _create_engine(location):
    """
    Create an engine whose transactions also cover DDL.

    pysqlite commits CREATE / DROP / ALTER statements on its own, outside
    any transaction SQLAlchemy opened. The event hooks below hand the
    transaction boundaries back to SQLAlchemy (the pysqlite recipe from the
    SQLAlchemy SQLite dialect documentation).
    """
    engine = sa.create_engine(location)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _emit_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return engine


# ============================================================
# LOAD
# ============================================================

def load_layoffs(location, table=None, config=None):
    """
    Load the complete layoffs dataset into a DataFrame.

    Parameters
    ----------
    location : str
        CSV path or SQLAlchemy URL.
    table : str, optional
        Source table for database stores. Defaults to
        GLOBAL_CONFIG["source_table"].
    config : dict, optional

    Returns
    -------
    df : pandas.DataFrame
        The nine schema columns in canonical order, with a fresh RangeIndex
        that reflects load order.
    stats : dict
        rows_in, rows_out, unparseable_numbers (integer-column values that
        were not numbers and were loaded as missing).

    Raises
    ------
    StorageError
        The store could not be read.
    ValueError
        A schema column is missing from the source.
    """
    columns = with_config(config, "columns")
    kind = resolve_store(location)

    try:
        if kind == "csv":
            # Read everything as text; types are assigned below
            df = pd.read_csv(location, dtype=str, keep_default_na=False)
        else:
            engine = _create_engine(location)
            try:
                df = pd.read_sql_table(_table_name(table, config, "source_table"), engine)
            finally:
                engine.dispose()
    except (OSError, sa.exc.SQLAlchemyError, pd.errors.ParserError, ValueError) as e:
        raise StorageError(f"Failed to load layoffs from {location}: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    require_columns(df, columns)

    df = df[columns].reset_index(drop=True)
    df = replace_null_tokens(df, with_config(config, "null_tokens"))
    df, n_unparseable = coerce_integer_columns(df, with_config(config, "integer_cols"))

    print(f"[OK] Loaded {location} (rows={len(df)})")
    return df, stage_stats(df, df, unparseable_numbers=n_unparseable)


# ============================================================
# EMIT
# ============================================================

def _write_table(df, engine, table, config):
    """
    Replace `table` with the contents of `df` without ever exposing a
    partially written table.

    Steps:
    - Insert every row into a staging table, in its own transaction
    - Only after that succeeded, drop the old table and rename the
      staging table into its place, in a second transaction

    A failed insert drops the staging table and leaves `table` untouched.
    """
    quote = engine.dialect.identifier_preparer.quote
    staging = f"{table}{STAGING_SUFFIX}"

    if with_config(config, "if_exists") == "fail" and sa.inspect(engine).has_table(table):
        raise StorageError(f"Destination table already exists: {table}")

    try:
        with engine.begin() as conn:
            df.to_sql(
                staging,
                conn,
                if_exists="replace",
                index=False,
                dtype={with_config(config, "date_col"): sa.Date()},
            )
    except (sa.exc.SQLAlchemyError, ValueError):
        with engine.begin() as conn:
            conn.exec_driver_sql(f"DROP TABLE IF EXISTS {quote(staging)}")
        raise

    with engine.begin() as conn:
        if sa.inspect(conn).has_table(table):
            conn.exec_driver_sql(f"DROP TABLE {quote(table)}")
        conn.exec_driver_sql(f"ALTER TABLE {quote(staging)} RENAME TO {quote(table)}")


def persist_layoffs(df, location, table=None, config=None):
    """
    Write the cleaned dataset, replacing whatever the destination held.

    Database writes go through a staging table (see `_write_table`), so a
    failed write leaves the previous destination table and its rows in
    place. This matters when the destination is the source table itself.

    Parameters
    ----------
    df : pandas.DataFrame
    location : str
        CSV path or SQLAlchemy URL.
    table : str, optional
        Destination table for database stores. Defaults to
        GLOBAL_CONFIG["destination_table"].
    config : dict, optional

    Raises
    ------
    StorageError
        The store could not be written.
    """
    kind = resolve_store(location)

    try:
        if kind == "csv":
            if with_config(config, "if_exists") == "fail" and os.path.exists(location):
                raise StorageError(f"Destination already exists: {location}")
            df.to_csv(location, index=False, date_format="%Y-%m-%d")
        else:
            engine = _create_engine(location)
            try:
                _write_table(df, engine, _table_name(table, config, "destination_table"), config)
            finally:
                engine.dispose()
    except (OSError, sa.exc.SQLAlchemyError, ValueError) as e:
        raise StorageError(f"Failed to write layoffs to {location}: {e}") from e

    print(f"[OK] Wrote {location} (rows={len(df)})")
