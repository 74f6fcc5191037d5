from src.config import GLOBAL_CONFIG


def is_blank(series):
    """
    Boolean mask of values that are missing or contain only whitespace.
    Non-string values are blank only when missing.
    """
    return series.isna() | series.map(lambda x: isinstance(x, str) and x.strip() == "")


def with_config(config, key):
    """Look up `key` in `config`, falling back to GLOBAL_CONFIG."""
    if config is not None and key in config:
        return config[key]
    return GLOBAL_CONFIG[key]


def stage_stats(df_in, df_out, **counts):
    """Row counts before/after a stage plus any stage-specific counts."""
    stats = {"rows_in": len(df_in), "rows_out": len(df_out)}
    stats.update({k: int(v) for k, v in counts.items()})
    return stats


def require_columns(df, columns):
    """Raise ValueError when any of `columns` is absent from `df`."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"Columns not found in DataFrame: {missing}")
