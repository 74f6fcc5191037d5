import pandas as pd
import pytest

from src.column_cleaning import coerce_integer_columns
from src.config import GLOBAL_CONFIG


COLUMNS = GLOBAL_CONFIG["columns"]

DEFAULT_RECORD = {
    "company": "Acme",
    "location": "SF Bay Area",
    "industry": "Retail",
    "total_laid_off": 10,
    "percentage_laid_off": "0.1",
    "date": "1/1/2023",
    "stage": "Series B",
    "country": "United States",
    "funds_raised_millions": 100,
}


@pytest.fixture
def make_layoffs():
    """Build a layoffs DataFrame from partial records, filling the rest with defaults."""
    def _make(*records):
        rows = [{**DEFAULT_RECORD, **r} for r in records]
        df = pd.DataFrame(rows, columns=COLUMNS)
        df, _ = coerce_integer_columns(df, GLOBAL_CONFIG["integer_cols"])
        return df
    return _make


RAW_CSV = """company,location,industry,total_laid_off,percentage_laid_off,date,stage,country,funds_raised_millions
 Included Health,SF Bay Area,Healthcare,NULL,0.06,7/25/2022,Series E,United States,272
 Included Health,SF Bay Area,Healthcare,NULL,0.06,7/25/2022,Series E,United States,272
 Included Health,SF Bay Area,Healthcare,NULL,0.06,7/25/2022,Series E,United States,272
Airbnb,SF Bay Area,,30,NULL,3/3/2023,Post-IPO,United States,6400
Airbnb,SF Bay Area,Travel,1900,0.25,5/5/2020,Post-IPO,United States,5400
Coinbase,SF Bay Area,Crypto Currency,950,0.2,1/10/2023,Post-IPO,United States.,549
Bally's Interactive,Providence,NULL,NULL,NULL,1/18/2023,Post-IPO,United States,946
Blackbaud,Charleston,Other,500,0.14,13/40/2023,Post-IPO,United States,NULL
"""


@pytest.fixture
def raw_csv(tmp_path):
    path = tmp_path / "layoffs.csv"
    path.write_text(RAW_CSV)
    return path
