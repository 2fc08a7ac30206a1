import pandas as pd

def coerce_int(s: pd.Series) -> pd.Series:
    v = pd.to_numeric(s, errors="coerce")
    # non-whole numbers count as missing
    v = v.where(v.isna() | (v % 1 == 0))
    return v.astype("Int64")

def text(s: pd.Series) -> pd.Series:
    return s.astype("string").str.strip().fillna("")
