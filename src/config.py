"""
GLOBAL CONFIGURATION
--------------------

This dictionary centralizes every constant used by the layoffs cleaning
pipeline. Keeping them in one place means the cleaning rules, the column
schema and the storage defaults can be adjusted without touching the
individual stage modules.

These settings control:
- the identifying column schema,
- which columns count as measurements,
- date parsing,
- industry and country standardization rules,
- the industry backfill join,
- placeholder strings treated as missing values,
- source / destination storage defaults.
"""

import os

GLOBAL_CONFIG = {
    # ---------------------------------------------------------
    # Schema
    # ---------------------------------------------------------
    # The nine persisted columns, in table order. Their joint equality
    # defines "the same record" for deduplication.
    "columns": [
        "company",
        "location",
        "industry",
        "total_laid_off",
        "percentage_laid_off",
        "date",
        "stage",
        "country",
        "funds_raised_millions",
    ],

    # Columns stored as integers in the source table (INT DEFAULT NULL).
    "integer_cols": ["total_laid_off", "funds_raised_millions"],

    # A record with all of these missing carries no usable measurement.
    "measurement_cols": ["total_laid_off", "percentage_laid_off"],

    # ---------------------------------------------------------
    # Date parsing
    # ---------------------------------------------------------
    "date_col": "date",
    "date_format": "%m/%d/%Y",

    # ---------------------------------------------------------
    # Standardization rules
    # ---------------------------------------------------------
    # Industry prefix family -> canonical label (case-sensitive prefix).
    "industry_families": {
        "Crypto": "Crypto",
    },

    # Countries starting with one of these lose any trailing "." characters.
    "country_prefixes_trailing_dot": ["United States"],

    # ---------------------------------------------------------
    # Industry backfill
    # ---------------------------------------------------------
    # A blank industry is copied from another record sharing these keys.
    "backfill_keys": ["company", "location"],
    "backfill_col": "industry",

    # ---------------------------------------------------------
    # Missing-value placeholders
    # ---------------------------------------------------------
    # Text exported from the source database spells NULL literally. Empty
    # strings are not listed: the source keeps '' and NULL apart.
    "null_tokens": ["NULL"],

    # ---------------------------------------------------------
    # Storage
    # ---------------------------------------------------------
    # Connection parameters are the only environment configuration.
    "database_url": os.getenv("LAYOFFS_DATABASE_URL"),
    "source_table": os.getenv("LAYOFFS_SOURCE_TABLE", "layoffs"),
    "destination_table": os.getenv("LAYOFFS_DESTINATION_TABLE", "layoffs_cleaned"),

    # The destination is always created fresh or overwritten.
    "if_exists": "replace",
}
