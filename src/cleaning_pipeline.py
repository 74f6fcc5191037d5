"""
cleaning_pipeline.py
--------------------

This module defines `clean_layoffs` and `run_pipeline`, which orchestrate
the complete layoffs cleaning job. It strings the individual stages
together in a fixed order:

    1. Load         read the whole source dataset
    2. Deduplicate  keep one representative per identical record group
    3. Standardize  trim, canonicalize and parse dates
    4. Backfill     copy missing industries from related records
    5. Prune        drop records without any measurement
    6. Emit         write the cleaned dataset

Every stage receives the previous stage's DataFrame and returns a new one
together with a small dict of counts. The counts are collected into a
summary so that a run either finishes with a per-stage report, or stops at
the first failing stage with that stage's name and the underlying cause.

Data-quality problems (a malformed date, an ambiguous backfill source) are
only counted; they never stop the run.
"""

# ============================================================
# IMPORTS
# ============================================================

from src.backfill import backfill_industry
from src.column_cleaning import standardize_layoffs
from src.data_loading import load_layoffs, persist_layoffs
from src.deduplication import remove_duplicates
from src.row_filtering import drop_unmeasured_rows


class CleaningStageError(RuntimeError):
    """A pipeline stage failed; later stages were not run."""

    def __init__(self, stage, cause):
        self.stage = stage
        self.cause = cause
        super().__init__(f"stage '{stage}' failed: {cause}")


# ============================================================
# STAGE ORDER
# ============================================================

# Deduplicate must precede Standardize: the duplicate key uses the text date.
CLEANING_STAGES = (
    ("deduplicate", lambda df, config: remove_duplicates(df, config=config)),
    ("standardize", standardize_layoffs),
    ("backfill", lambda df, config: backfill_industry(df, config=config)),
    ("prune", lambda df, config: drop_unmeasured_rows(df, config=config)),
)


def _run_stage(name, func, *args):
    try:
        return func(*args)
    except CleaningStageError:
        raise
    except Exception as e:
        print(f"[ERROR] Stage '{name}' failed: {e}")
        raise CleaningStageError(name, e) from e


# ============================================================
# IN-MEMORY CLEANING
# ============================================================

def clean_layoffs(df, config=None):
    """
    Clean a layoffs DataFrame in memory.

    Parameters
    ----------
    df : pandas.DataFrame
        Raw records with the nine schema columns.
    config : dict, optional
        Overrides for GLOBAL_CONFIG keys.

    Returns
    -------
    df_clean : pandas.DataFrame
        Cleaned records with a fresh RangeIndex.
    summary : dict
        Stage name -> stats dict (rows_in, rows_out and stage counts).

    Raises
    ------
    CleaningStageError
        If any stage fails. The input DataFrame is never modified.

    Pipeline Overview
    -----------------
    **Deduplicate**: identical nine-column records collapse to the first one
    loaded.

    **Standardize**: company names trimmed, industry families collapsed,
    "United States." fixed, MM/DD/YYYY dates parsed.

    **Backfill**: blank industries copied from the same company/location.

    **Prune**: rows with neither total_laid_off nor percentage_laid_off
    removed.
    """
    df = df.copy()
    summary = {}

    for name, stage in CLEANING_STAGES:
        df, stats = _run_stage(name, stage, df, config)
        summary[name] = stats
        print(f"[OK] {name}: rows {stats['rows_in']} -> {stats['rows_out']}")

    return df.reset_index(drop=True), summary


# ============================================================
# FULL RUN: LOAD -> CLEAN -> EMIT
# ============================================================

def run_pipeline(source, destination, source_table=None, destination_table=None, config=None):
    """
    Run every stage exactly once against one source and one destination.

    Parameters
    ----------
    source : str
        CSV path or SQLAlchemy URL to read from.
    destination : str
        CSV path or SQLAlchemy URL to write to.
    source_table, destination_table : str, optional
        Table names for database stores.
    config : dict, optional

    Returns
    -------
    df_clean : pandas.DataFrame
    summary : dict
        Per-stage stats, including "load" and "emit".

    Raises
    ------
    CleaningStageError
        The failing stage halts the run; nothing is written unless every
        cleaning stage succeeded.
    """
    df, load_stats = _run_stage("load", load_layoffs, source, source_table, config)
    summary = {"load": load_stats}

    df_clean, stage_summary = clean_layoffs(df, config)
    summary.update(stage_summary)

    _run_stage("emit", persist_layoffs, df_clean, destination, destination_table, config)
    summary["emit"] = {"rows_in": len(df_clean), "rows_out": len(df_clean)}

    return df_clean, summary


# ============================================================
# REPORTING
# ============================================================

def format_summary(summary):
    """
    Render a run summary as text, one line per stage.

    Example:
        load         rows 2361 -> 2361
        deduplicate  rows 2361 -> 2356  rows_removed=5, duplicate_groups=5
    """
    lines = []
    for stage, stats in summary.items():
        extras = ", ".join(
            f"{k}={v}" for k, v in stats.items() if k not in ("rows_in", "rows_out")
        )
        line = f"{stage:<12} rows {stats['rows_in']} -> {stats['rows_out']}"
        lines.append(f"{line}  {extras}" if extras else line)
    return "\n".join(lines)
