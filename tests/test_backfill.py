import pandas as pd

from src.backfill import backfill_industry, find_backfill_candidates
from src.utils import is_blank


def test_backfill_from_same_company_and_location(make_layoffs):
    df = make_layoffs(
        {"company": "Airbnb", "industry": ""},
        {"company": "Airbnb", "industry": "Travel"},
        {"company": "Airbnb", "location": "New York City", "industry": None},
        {"company": "Juul", "industry": None},
    )

    out, stats = backfill_industry(df)

    assert out["industry"].iloc[0] == "Travel"
    assert out["industry"].iloc[1] == "Travel"
    assert is_blank(out["industry"]).tolist() == [False, False, True, True]
    assert stats == {
        "rows_in": 4,
        "rows_out": 4,
        "filled": 1,
        "still_missing": 2,
        "ambiguous_sources": 0,
    }


def test_ambiguous_sources_use_first_loaded_value(make_layoffs):
    df = make_layoffs(
        {"company": "Carvana", "industry": None},
        {"company": "Carvana", "industry": "Transportation"},
        {"company": "Carvana", "industry": "Retail"},
    )

    out, stats = backfill_industry(df)

    assert out["industry"].tolist() == ["Transportation", "Transportation", "Retail"]
    assert stats["filled"] == 1
    assert stats["ambiguous_sources"] == 1


def test_whitespace_industry_is_blank_and_never_a_source(make_layoffs):
    df = make_layoffs(
        {"company": "Bally's", "industry": "   "},
        {"company": "Bally's", "industry": None},
    )

    out, stats = backfill_industry(df)

    assert is_blank(out["industry"]).all()
    assert stats["filled"] == 0
    assert stats["still_missing"] == 2


def test_missing_keys_never_match(make_layoffs):
    df = make_layoffs(
        {"company": None, "industry": None},
        {"company": None, "industry": "Retail"},
    )

    out, stats = backfill_industry(df)

    assert pd.isna(out["industry"].iloc[0])
    assert stats["filled"] == 0


def test_present_values_are_never_changed(make_layoffs):
    df = make_layoffs(
        {"company": "Uber", "industry": "Transportation"},
        {"company": "Uber", "industry": "Food"},
        {"company": "Uber", "industry": None},
    )

    out, _ = backfill_industry(df)

    assert out["industry"].iloc[:2].tolist() == ["Transportation", "Food"]


def test_filled_values_come_from_related_records(make_layoffs):
    df = make_layoffs(
        {"company": "A", "industry": None},
        {"company": "A", "industry": "Retail"},
        {"company": "B", "industry": ""},
        {"company": "B", "location": "Boston", "industry": "Food"},
        {"company": "C", "industry": "Fintech"},
        {"company": "C", "industry": None},
    )

    out, _ = backfill_industry(df)

    before_blank = is_blank(df["industry"])
    for idx in out.index[(before_blank & ~is_blank(out["industry"])).to_numpy()]:
        row = out.loc[idx]
        related = df[
            (df["company"] == row["company"])
            & (df["location"] == row["location"])
            & ~before_blank
        ]
        assert row["industry"] in related["industry"].tolist()

    assert out["industry"].iloc[[0, 5]].tolist() == ["Retail", "Fintech"]
    assert is_blank(out["industry"]).iloc[2]


def test_candidate_table(make_layoffs):
    df = make_layoffs(
        {"company": "A", "industry": "Retail"},
        {"company": "A", "industry": "Food"},
        {"company": "B", "industry": None},
    )

    candidates = find_backfill_candidates(df)

    assert candidates["company"].tolist() == ["A"]
    assert candidates["fill_value"].tolist() == ["Retail"]
    assert candidates["n_candidates"].tolist() == [2]
