"""
deduplication.py
----------------

This module removes duplicate layoff records.

Two records are duplicates when they agree on every one of the nine
identifying columns (company, location, industry, total_laid_off,
percentage_laid_off, date, stage, country, funds_raised_millions). Missing
values compare equal to each other, so two rows that are both NULL in the
same column still count as the same record.

It includes:

1. Row numbering within duplicate groups (`row_num`)
2. Inspection of the surplus copies
3. Removal of every copy except the first one loaded

The date column must still be in its original text form when these
functions run; the pipeline runs deduplication before standardization.
"""

# ============================================================
# IMPORTS
# ============================================================

import pandas as pd

from src.utils import require_columns, stage_stats, with_config


ROW_NUM_COL = "row_num"


# ============================================================
# 1. NUMBER ROWS WITHIN DUPLICATE GROUPS
# ============================================================

def add_row_numbers(df, subset=None):
    """
    Number each record within its group of identical records.

    The first record of a group (in load order) gets 1, the next copy 2,
    and so on. A record that has no duplicate always gets 1.

    Example:
        company  date       row_num
        Acme     1/1/2023   1
        Acme     1/1/2023   2
        Beta     1/1/2023   1

    Parameters
    ----------
    df : pandas.DataFrame
    subset : list of str, optional
        Identifying columns. Defaults to GLOBAL_CONFIG["columns"].

    Returns
    -------
    pandas.DataFrame
        Copy of df with an extra integer `row_num` column.
    """
    subset = subset if subset is not None else with_config(None, "columns")
    require_columns(df, subset)

    df = df.copy()

    if df.empty:
        df[ROW_NUM_COL] = pd.Series(dtype="int64")
        return df

    df[ROW_NUM_COL] = df.groupby(subset, dropna=False, sort=False).cumcount() + 1
    return df


# ============================================================
# 2. INSPECT DUPLICATES
# ============================================================

def find_duplicates(df, subset=None):
    """
    Return the surplus copies (row_num > 1) that deduplication would delete.

    Parameters
    ----------
    df : pandas.DataFrame
    subset : list of str, optional

    Returns
    -------
    pandas.DataFrame
        Duplicate records, including the `row_num` column.
    """
    numbered = add_row_numbers(df, subset)
    return numbered[numbered[ROW_NUM_COL] > 1]


# ============================================================
# 3. REMOVE DUPLICATES
# ============================================================

def remove_duplicates(df, subset=None, config=None):
    """
    Keep exactly one representative per group of identical records.

    Steps:
    - Number rows within each identifying-tuple group
    - Keep row_num == 1 (the first record loaded)
    - Drop the transient `row_num` column

    Parameters
    ----------
    df : pandas.DataFrame
    subset : list of str, optional
        Identifying columns; defaults to the configured schema.
    config : dict, optional

    Returns
    -------
    df_out : pandas.DataFrame
    stats : dict
        rows_in, rows_out, rows_removed, duplicate_groups.
    """
    subset = subset if subset is not None else with_config(config, "columns")

    numbered = add_row_numbers(df, subset)
    surplus = numbered[ROW_NUM_COL] > 1

    # Groups with at least one surplus copy have exactly one row_num == 2
    duplicate_groups = int((numbered[ROW_NUM_COL] == 2).sum())

    out = numbered.loc[~surplus].drop(columns=[ROW_NUM_COL])

    return out, stage_stats(
        df, out,
        rows_removed=int(surplus.sum()),
        duplicate_groups=duplicate_groups,
    )
