from src.row_filtering import drop_unmeasured_rows, find_unmeasured_rows


def test_drop_rows_without_any_measurement(make_layoffs):
    df = make_layoffs(
        {"total_laid_off": None, "percentage_laid_off": None},
        {"total_laid_off": 5, "percentage_laid_off": None},
        {"total_laid_off": None, "percentage_laid_off": "0.2"},
        {},
    )

    out, stats = drop_unmeasured_rows(df)

    assert list(out.index) == [1, 2, 3]
    assert stats == {"rows_in": 4, "rows_out": 3, "rows_removed": 1}
    assert not out[["total_laid_off", "percentage_laid_off"]].isna().all(axis=1).any()


def test_find_unmeasured_rows(make_layoffs):
    df = make_layoffs({}, {"total_laid_off": None, "percentage_laid_off": None})

    assert list(find_unmeasured_rows(df).index) == [1]


def test_pruning_twice_is_a_noop(make_layoffs):
    df = make_layoffs({"total_laid_off": None, "percentage_laid_off": None}, {})

    once, _ = drop_unmeasured_rows(df)
    twice, stats = drop_unmeasured_rows(once)

    assert twice.equals(once)
    assert stats["rows_removed"] == 0


def test_blank_percentage_counts_as_missing(make_layoffs):
    df = make_layoffs(
        {"total_laid_off": None, "percentage_laid_off": ""},
        {"total_laid_off": None, "percentage_laid_off": "  "},
        {"total_laid_off": 3, "percentage_laid_off": ""},
    )

    out, stats = drop_unmeasured_rows(df)

    assert list(out.index) == [2]
    assert stats["rows_removed"] == 2
