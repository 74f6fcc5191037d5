"""
backfill.py - Industry Backfill
-------------------------------

This module fills in missing industry labels using other records of the
same company at the same location.

Many layoff events are reported more than once for a company (different
dates, different rounds). When one report is missing its industry while
another report for the same company and location carries it, the missing
value is copied over.

Rules:
- A record needs a backfill when its industry is NULL, empty or whitespace.
- A candidate source is any record with the same company AND location and
  a non-blank industry.
- Records with a missing company or location never match anything,
  mirroring SQL join semantics where NULL = NULL is not true.
- If a group offers several different industries, the first non-blank one
  in load order wins. Such records are counted as ambiguous in the stats.
- Records without any candidate keep their missing industry.
"""

# ============================================================
# IMPORTS
# ============================================================

import pandas as pd      # DataFrame operations

from src.utils import is_blank, require_columns, stage_stats, with_config


# ============================================================
# 1. CANDIDATE LOOKUP TABLE
# ============================================================

def find_backfill_candidates(df, keys=None, col=None):
    """
    Build the per-group lookup table of backfill values.

    Parameters
    ----------
    df : pandas.DataFrame
    keys : list of str, optional
        Join keys. Defaults to GLOBAL_CONFIG["backfill_keys"].
    col : str, optional
        Column to fill. Defaults to GLOBAL_CONFIG["backfill_col"].

    Returns
    -------
    pandas.DataFrame
        One row per key group that has at least one non-blank value, with
        columns:
        - `fill_value` : first non-blank value in load order
        - `n_candidates` : number of distinct non-blank values
    """
    keys = keys if keys is not None else with_config(None, "backfill_keys")
    col = col if col is not None else with_config(None, "backfill_col")
    require_columns(df, list(keys) + [col])

    known = df.loc[~is_blank(df[col]), list(keys) + [col]]

    if known.empty:
        return pd.DataFrame(
            columns=list(keys) + ["fill_value", "n_candidates"]
        )

    grouped = known.groupby(list(keys), sort=False)[col]
    candidates = pd.DataFrame({
        "fill_value": grouped.first(),
        "n_candidates": grouped.nunique(),
    })

    return candidates.reset_index()


# ============================================================
# 2. BACKFILL STAGE
# ============================================================

def backfill_industry(df, keys=None, col=None, config=None):
    """
    Fill blank industry values from related records.

    Parameters
    ----------
    df : pandas.DataFrame
    keys : list of str, optional
    col : str, optional
    config : dict, optional

    Returns
    -------
    df_out : pandas.DataFrame
    stats : dict
        rows_in, rows_out, filled, still_missing, ambiguous_sources.

    Notes
    -----
    - Values that were present before the stage are never changed.
    - The lookup table is computed once, before any value is filled, so a
      filled value always comes from a record that was non-blank when the
      stage started.
    """
    keys = list(keys if keys is not None else with_config(config, "backfill_keys"))
    col = col if col is not None else with_config(config, "backfill_col")

    df = df.copy()
    candidates = find_backfill_candidates(df, keys, col)

    needs_fill = is_blank(df[col])
    if not needs_fill.any() or candidates.empty:
        return df, stage_stats(
            df, df, filled=0, still_missing=needs_fill.sum(), ambiguous_sources=0
        )

    # Left-join the lookup table onto the rows that need a value,
    # remembering where each one came from
    targets = df.loc[needs_fill, keys].copy()
    targets["_row"] = targets.index
    matched = targets.merge(candidates, on=keys, how="left")
    matched = matched[matched["fill_value"].notna()].set_index("_row")

    if not matched.empty:
        df[col] = df[col].astype(object)
        df.loc[matched.index, col] = matched["fill_value"]

    n_filled = len(matched)
    n_ambiguous = int((matched["n_candidates"] > 1).sum())

    if n_ambiguous:
        print(
            f"[WARNING] {n_ambiguous} record(s) backfilled from a group with "
            f"several '{col}' values; used the first one loaded."
        )

    return df, stage_stats(
        df, df,
        filled=n_filled,
        still_missing=int(needs_fill.sum()) - n_filled,
        ambiguous_sources=n_ambiguous,
    )
