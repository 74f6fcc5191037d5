"""
row_filtering.py
----------------

This module removes layoff records that carry no usable measurement.

A record is unusable when every measurement column (total_laid_off and
percentage_laid_off by default) is missing or blank: it says that layoffs happened
but not how many. Such rows are deleted outright; nothing can be inferred
for them.

Included functions:
- find_unmeasured_rows(): inspect the rows that would be removed.
- drop_unmeasured_rows(): the Prune stage.
"""

# ============================================================
# IMPORTS
# ============================================================

from src.utils import is_blank, require_columns, stage_stats, with_config


# ============================================================
# 1. INSPECT UNMEASURED ROWS
# ============================================================

def unmeasured_mask(df, cols=None):
    """Boolean mask of rows where all of `cols` are missing or blank text."""
    cols = list(cols if cols is not None else with_config(None, "measurement_cols"))
    require_columns(df, cols)
    return df[cols].apply(is_blank).all(axis=1).astype(bool)


def find_unmeasured_rows(df, cols=None):
    """
    Return the records where every measurement column is missing or blank.

    Parameters
    ----------
    df : pandas.DataFrame
    cols : list of str, optional
        Measurement columns. Defaults to GLOBAL_CONFIG["measurement_cols"].

    Returns
    -------
    pandas.DataFrame
    """
    return df[unmeasured_mask(df, cols)]


# ============================================================
# 2. PRUNE STAGE
# ============================================================

def drop_unmeasured_rows(df, cols=None, config=None):
    """
    Remove records with no measurement at all.

    Parameters
    ----------
    df : pandas.DataFrame
    cols : list of str, optional
    config : dict, optional

    Returns
    -------
    df_out : pandas.DataFrame
        DataFrame without the unmeasured rows.
    stats : dict
        rows_in, rows_out, rows_removed.
    """
    cols = cols if cols is not None else with_config(config, "measurement_cols")
    mask = unmeasured_mask(df, cols)

    out = df.loc[~mask].copy()
    return out, stage_stats(df, out, rows_removed=int(mask.sum()))
