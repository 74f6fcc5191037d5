from src.data_loading import load_layoffs
from src.eda import country_variants, industry_variants, inspect_layoffs


def test_inspect_layoffs_counts(raw_csv, capsys):
    report = inspect_layoffs(load_layoffs(str(raw_csv))[0], name="Raw")

    assert report == {
        "duplicates": 2,
        "untrimmed_companies": 3,
        "industry_variants": 1,
        "country_variants": 1,
        "missing_industry": 2,
        "backfill_matches": 1,
        "unmeasured": 1,
    }
    assert "===== Raw Shape =====" in capsys.readouterr().out


def test_country_variants(make_layoffs):
    df = make_layoffs({"country": "United States."}, {"country": "United States"}, {"country": "India"})

    variants = country_variants(df)

    assert variants["country"].tolist() == ["United States."]
    assert variants["trimmed"].tolist() == ["United States"]


def test_industry_variants(make_layoffs):
    df = make_layoffs({"industry": "Crypto Currency"}, {"industry": "Crypto"}, {"industry": "Crypto"}, {"industry": "Food"})

    counts = industry_variants(df)

    assert counts.to_dict() == {"Crypto": 2, "Crypto Currency": 1}
