from src.config import GLOBAL_CONFIG
from src.deduplication import add_row_numbers, find_duplicates, remove_duplicates


COLUMNS = GLOBAL_CONFIG["columns"]


def test_row_numbers_count_copies_in_load_order(make_layoffs):
    df = make_layoffs({}, {"company": "Beta"}, {}, {})

    numbered = add_row_numbers(df)

    assert numbered["row_num"].tolist() == [1, 1, 2, 3]


def test_remove_duplicates_keeps_first_of_each_group(make_layoffs):
    df = make_layoffs(
        {"industry": "Crypto", "percentage_laid_off": None},
        {"industry": "Crypto", "percentage_laid_off": None},
        {"industry": "Crypto", "percentage_laid_off": None, "date": "1/2/2023"},
    )

    out, stats = remove_duplicates(df)

    assert list(out.index) == [0, 2]
    assert "row_num" not in out.columns
    assert stats == {"rows_in": 3, "rows_out": 2, "rows_removed": 1, "duplicate_groups": 1}


def test_missing_values_compare_equal(make_layoffs):
    df = make_layoffs(
        {"industry": None, "total_laid_off": None},
        {"industry": None, "total_laid_off": None},
    )

    out, stats = remove_duplicates(df)

    assert len(out) == 1
    assert stats["rows_removed"] == 1


def test_single_field_difference_is_not_a_duplicate(make_layoffs):
    """Every persisted column is part of the key, including funds raised."""
    df = make_layoffs({}, {"funds_raised_millions": 101}, {"stage": "Series C"})

    out, stats = remove_duplicates(df)

    assert len(out) == 3
    assert stats["duplicate_groups"] == 0


def test_survivors_have_distinct_identifying_tuples(make_layoffs):
    df = make_layoffs(
        {}, {}, {"company": "Beta"}, {"company": "Beta"}, {"company": "Beta", "industry": None},
        {"country": "United States."}, {},
    )

    out, _ = remove_duplicates(df)

    assert not out.duplicated(subset=COLUMNS).any()
    assert len(out) == 4


def test_find_duplicates_returns_surplus_copies(make_layoffs):
    df = make_layoffs({}, {}, {"company": "Beta"})

    dupes = find_duplicates(df)

    assert list(dupes.index) == [1]
    assert (dupes["row_num"] > 1).all()


def test_empty_frame(make_layoffs):
    df = make_layoffs().iloc[0:0]

    out, stats = remove_duplicates(df)

    assert out.empty
    assert list(out.columns) == COLUMNS
    assert stats["rows_removed"] == 0
