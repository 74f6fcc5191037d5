"""
column_cleaning.py
------------------

This module contains the per-column cleaning rules applied to the layoffs
dataset. It covers two groups of utilities:

1. Load-time normalization
   - converting literal placeholders ("NULL", "N/A", "") into real NaN,
   - coercing integer measurement columns into nullable numeric dtypes.

2. The Standardize stage
   - trimming whitespace from company names,
   - collapsing industry label families ("Crypto Currency" -> "Crypto"),
   - removing trailing periods from "United States." style countries,
   - parsing the MM/DD/YYYY text date into a real date column.

Each standardization rule is:
- non-destructive (returns a copy),
- idempotent (running it twice changes nothing the second time),
- paired with a count of the values it modified, for the run summary.
"""

# ============================================================
# IMPORTS
# ============================================================

import numpy as np       # NaN handling
import pandas as pd      # DataFrame operations

from src.utils import require_columns, stage_stats, with_config


# ============================================================
# HELPERS
# ============================================================

def text_columns(df):
    """
    Return the names of all text-valued columns.

    Depending on the pandas version and the loader, text is stored either
    with the classic object dtype or the dedicated string dtype; both count.
    """
    return [
        col for col in df.columns
        if pd.api.types.is_object_dtype(df[col]) or pd.api.types.is_string_dtype(df[col])
    ]


def _replace_where(series, mask, new_values):
    # Assign only on masked rows so untouched values keep their identity
    out = series.copy()
    if mask.any():
        out = out.astype(object)
        out[mask] = new_values[mask]
    return out


# ============================================================
# LOAD-TIME NORMALIZATION
# ============================================================

def replace_null_tokens(df, tokens=None):
    """
    Convert string placeholders for missing values into actual np.nan.

    Exports of the layoffs table spell a SQL NULL as the literal text
    "NULL". Only exact matches are replaced: an empty string is a value of
    its own (the source table distinguishes '' from NULL), so two records
    that differ only in '' versus NULL stay distinct for deduplication.

    Parameters
    ----------
    df : pandas.DataFrame
    tokens : iterable of str, optional
        Placeholder spellings. Defaults to GLOBAL_CONFIG["null_tokens"].

    Returns
    -------
    pandas.DataFrame
    """
    df = df.copy()
    tokens = set(tokens if tokens is not None else with_config(None, "null_tokens"))

    for col in text_columns(df):
        df[col] = df[col].apply(
            lambda x: np.nan if isinstance(x, str) and x in tokens else x
        )

    return df


def _to_number(x):
    # "1,000" -> "1000"; blank text carries no value
    if isinstance(x, str):
        x = x.replace(",", "").strip()
        return x if x else np.nan
    return x


def coerce_integer_columns(df, cols):
    """
    Convert integer-like columns into the nullable Int64 dtype.

    Thousands separators are removed before parsing ("1,000" -> 1000) and
    blank text counts as missing. Anything else that cannot be read as a
    finite number ("abc", "inf") becomes missing too, is counted as
    unparseable and reported with a warning; one bad value never aborts
    the load. If a column holds genuinely fractional values (funds raised
    is occasionally reported as e.g. 12.5) the column falls back to Float64
    instead of truncating.

    Parameters
    ----------
    df : pandas.DataFrame
    cols : list of str

    Returns
    -------
    df_out : pandas.DataFrame
    n_unparseable : int
        Non-blank values, across all `cols`, that were not finite numbers.
    """
    df = df.copy()
    n_unparseable = 0

    for col in cols:
        if col not in df.columns:
            continue

        values = df[col].map(_to_number)
        numeric = pd.to_numeric(values, errors="coerce").astype("float64")
        numeric[~np.isfinite(numeric)] = np.nan

        unparseable = values.notna() & numeric.isna()
        if unparseable.any():
            examples = df.loc[unparseable, col].astype(str).unique()[:5].tolist()
            print(f"[WARNING] {int(unparseable.sum())} unparseable value(s) in '{col}' set to missing: {examples}")
            n_unparseable += int(unparseable.sum())

        non_null = numeric.dropna()
        if (non_null == np.floor(non_null)).all():
            df[col] = numeric.astype("Int64")
        else:
            df[col] = numeric.astype("Float64")

    return df, n_unparseable


# ============================================================
# STANDARDIZATION RULES
# ============================================================

def trim_company(df, col="company"):
    """
    Strip leading and trailing whitespace from company names.

    Returns
    -------
    df_out : pandas.DataFrame
    n_modified : int
        Number of values that actually changed.
    """
    df = df.copy()
    stripped = df[col].map(lambda x: x.strip() if isinstance(x, str) else x)
    mask = df[col].map(lambda x: isinstance(x, str) and x != x.strip())

    df[col] = _replace_where(df[col], mask, stripped)
    return df, int(mask.sum())


def canonicalize_industry(df, families=None, col="industry"):
    """
    Collapse industry labels that belong to one family into a single label.

    A value matches a family when it starts with the family prefix
    (case-sensitive, any suffix). With the default configuration
    "Crypto Currency", "CryptoFinance" and "Crypto" all become "Crypto".

    Parameters
    ----------
    df : pandas.DataFrame
    families : dict, optional
        prefix -> canonical label. Defaults to
        GLOBAL_CONFIG["industry_families"].

    Returns
    -------
    df_out : pandas.DataFrame
    n_modified : int
    """
    df = df.copy()
    families = families if families is not None else with_config(None, "industry_families")
    n_modified = 0

    for prefix, label in families.items():
        mask = df[col].map(
            lambda x: isinstance(x, str) and x.startswith(prefix) and x != label
        )
        df[col] = _replace_where(df[col], mask, pd.Series(label, index=df.index, dtype=object))
        n_modified += int(mask.sum())

    return df, n_modified


def strip_country_trailing_dots(df, prefixes=None, col="country"):
    """
    Remove trailing "." characters from selected country names.

    Only countries starting with one of `prefixes` are touched, so that
    "United States." becomes "United States" while other values are left
    exactly as loaded.

    Returns
    -------
    df_out : pandas.DataFrame
    n_modified : int
    """
    df = df.copy()
    prefixes = tuple(
        prefixes if prefixes is not None else with_config(None, "country_prefixes_trailing_dot")
    )

    mask = df[col].map(
        lambda x: isinstance(x, str) and x.startswith(prefixes) and x.endswith(".")
    )
    stripped = df[col].map(lambda x: x.rstrip(".") if isinstance(x, str) else x)

    df[col] = _replace_where(df[col], mask, stripped)
    return df, int(mask.sum())


def parse_dates(df, col="date", fmt="%m/%d/%Y"):
    """
    Convert a text date column into a real date column.

    Text values are parsed strictly with `fmt`. A value that does not match
    the format, or that names an impossible date such as "13/40/2023",
    becomes NaT and is counted as malformed. Empty text becomes NaT
    without being counted. The batch is never aborted
    because of a single bad date.

    A column that is already a datetime dtype is returned unchanged, which
    keeps the rule idempotent.

    Parameters
    ----------
    df : pandas.DataFrame
    col : str
    fmt : str
        strptime-style format, "%m/%d/%Y" for the layoffs export.

    Returns
    -------
    df_out : pandas.DataFrame
    n_malformed : int
        Non-missing values that could not be parsed.
    """
    df = df.copy()

    if pd.api.types.is_datetime64_any_dtype(df[col]):
        return df, 0

    values = df[col]
    is_text = values.map(lambda x: isinstance(x, str)).astype(bool)

    parsed = pd.Series(pd.NaT, index=df.index, dtype="datetime64[ns]")
    if is_text.any():
        parsed[is_text] = pd.to_datetime(
            values[is_text].astype(object).str.strip(), format=fmt, errors="coerce"
        )

    # date / datetime objects coming from a typed source column
    other = values.notna() & ~is_text
    if other.any():
        parsed[other] = pd.to_datetime(values[other], errors="coerce")

    # blank text is a missing date, not a malformed one
    blank = values.map(lambda x: isinstance(x, str) and x.strip() == "").astype(bool)
    malformed = values.notna() & ~blank & parsed.isna()
    if malformed.any():
        examples = values[malformed].astype(str).unique()[:5].tolist()
        print(f"[WARNING] {int(malformed.sum())} malformed value(s) in '{col}' set to NaT: {examples}")

    df[col] = parsed.dt.normalize()
    return df, int(malformed.sum())


# ============================================================
# STANDARDIZE STAGE
# ============================================================

def standardize_layoffs(df, config=None):
    """
    Apply every standardization rule in a fixed order.

    Steps:
    - Trim company names
    - Canonicalize industry families
    - Strip trailing periods from configured countries
    - Parse the text date into a date column

    Must run after deduplication: the duplicate key is computed on the
    original text date.

    Parameters
    ----------
    df : pandas.DataFrame
    config : dict, optional
        Overrides for GLOBAL_CONFIG keys.

    Returns
    -------
    df_out : pandas.DataFrame
    stats : dict
        rows_in, rows_out, companies_trimmed, industries_canonicalized,
        countries_fixed, malformed_dates.
    """
    date_col = with_config(config, "date_col")
    require_columns(df, ["company", "industry", "country", date_col])

    out, n_trimmed = trim_company(df)
    out, n_industry = canonicalize_industry(out, with_config(config, "industry_families"))
    out, n_country = strip_country_trailing_dots(
        out, with_config(config, "country_prefixes_trailing_dot")
    )
    out, n_malformed = parse_dates(out, date_col, with_config(config, "date_format"))

    return out, stage_stats(
        df, out,
        companies_trimmed=n_trimmed,
        industries_canonicalized=n_industry,
        countries_fixed=n_country,
        malformed_dates=n_malformed,
    )
