"""
eda.py
------

This module provides read-only inspection utilities for the layoffs
dataset. They answer the questions one asks before (and after) cleaning:

- basic dataset inspection (shape, dtypes, first rows),
- how many surplus duplicate records exist,
- which company names carry stray whitespace,
- which industry labels belong to a prefix family,
- which countries differ from their trimmed form,
- which records have a blank industry, and how many of those can be
  backfilled from a related record,
- which records have no measurement at all.

Nothing here modifies the data. The functions print their findings and
return them so they can also be used in notebooks and tests.
"""

# ============================================================
# IMPORTS
# ============================================================

import pandas as pd          # Tabular data manipulation

from src.backfill import find_backfill_candidates
from src.deduplication import find_duplicates
from src.row_filtering import find_unmeasured_rows
from src.utils import is_blank, with_config


# ============================================================
# BASIC DATAFRAME INFORMATION
# ============================================================

def basic_info(df, name):
    """
    Print a quick overview of a dataset:
    - shape
    - dtypes
    - first rows
    """
    print(f"\n\n===== {name} =====")
    print("Shape:", df.shape)

    print("\n--- Dtypes ---")
    print(df.dtypes)

    print("\n--- First Rows ---")
    print(df.head())


# ============================================================
# COLUMN-LEVEL CHECKS
# ============================================================

def country_variants(df, col="country"):
    """
    Distinct country values next to their form without trailing periods,
    limited to values where the two differ.
    """
    distinct = pd.Series(df[col].dropna().unique(), dtype=object)
    trimmed = distinct.map(lambda x: x.rstrip(".") if isinstance(x, str) else x)

    variants = pd.DataFrame({col: distinct, "trimmed": trimmed})
    return variants[variants[col] != variants["trimmed"]].sort_values(col).reset_index(drop=True)


def industry_variants(df, families=None, col="industry"):
    """
    Count every industry label that falls in a configured prefix family.

    Returns
    -------
    pandas.Series
        label -> number of records, for labels such as "Crypto Currency".
    """
    families = families if families is not None else with_config(None, "industry_families")
    prefixes = tuple(families)

    in_family = df[col].map(lambda x: isinstance(x, str) and x.startswith(prefixes)).astype(bool)
    return df.loc[in_family, col].value_counts()


def untrimmed_companies(df, col="company"):
    """Records whose company name has leading or trailing whitespace."""
    mask = df[col].map(lambda x: isinstance(x, str) and x != x.strip()).astype(bool)
    return df[mask]


# ============================================================
# STRUCTURED INSPECTION
# ============================================================

def inspect_layoffs(df, name="Layoffs", config=None):
    """
    Perform a structured data-quality inspection of a layoffs dataset.

    Includes:
    - surplus duplicate records
    - untrimmed company names
    - industry family variants
    - country variants with trailing periods
    - blank industries and how many have a backfill source
    - records without any measurement

    Returns a dictionary of counts, one entry per check.
    """
    columns = with_config(config, "columns")
    keys = with_config(config, "backfill_keys")
    col = with_config(config, "backfill_col")

    duplicates = find_duplicates(df, columns)
    companies = untrimmed_companies(df)
    industries = industry_variants(df, with_config(config, "industry_families"))
    countries = country_variants(df)

    missing = df[is_blank(df[col])]
    candidates = find_backfill_candidates(df, keys, col)
    matches = missing.merge(candidates[keys], on=keys, how="inner")

    unmeasured = find_unmeasured_rows(df, with_config(config, "measurement_cols"))

    print(f"\n===== {name} Shape =====")
    print(df.shape)

    print(f"\n===== {name} Duplicate Records (row_num > 1) =====")
    print(duplicates if not duplicates.empty else "none")

    print(f"\n===== {name} Untrimmed Company Names =====")
    print(companies["company"].tolist())

    print(f"\n===== {name} Industry Family Variants =====")
    print(industries)

    print(f"\n===== {name} Country Variants =====")
    print(countries)

    print(f"\n===== {name} Blank '{col}' =====")
    print(f"{len(missing)} blank, {len(matches)} with a backfill source")

    print(f"\n===== {name} Records Without Measurement =====")
    print(len(unmeasured))

    return {
        "duplicates": len(duplicates),
        "untrimmed_companies": len(companies),
        "industry_variants": int(industries.sum()),
        "country_variants": len(countries),
        "missing_industry": len(missing),
        "backfill_matches": len(matches),
        "unmeasured": len(unmeasured),
    }
