# catalog_pipeline/reports/queries.py
"""
Die Auswertungen des Katalogs, je eine Funktion pro Report.

Jede Funktion bekommt den Katalog als DataFrame (Schema siehe
utils.basic_validator.RECORD_COLUMNS), das Bezugsdatum `today` und die
Report-Parameter, und liefert einen DataFrame mit festen Spalten.
"""
from datetime import date
from typing import Sequence

import numpy as np
import pandas as pd

from catalog_pipeline.transform.aggregate import (
    group_count,
    longest_by_metric,
    percentage_by_group,
    top_n_per_partition,
)
from catalog_pipeline.transform.normalize import (
    MOVIE,
    SERIES,
    contains_text,
    date_added_series,
    duration_amount,
    explode_frame,
    has_token,
    split_tokens,
)
from catalog_pipeline.utils.basic_validator import RECORD_COLUMNS


def _records(df: pd.DataFrame, mask: pd.Series) -> pd.DataFrame:
    return df.loc[mask, RECORD_COLUMNS].reset_index(drop=True)


def _counts_frame(counts: pd.Series, key_col: str, count_col: str) -> pd.DataFrame:
    return pd.DataFrame({key_col: list(counts.index), count_col: counts.to_numpy(dtype="int64")})


def _release_year_after(df: pd.DataFrame, year: int) -> pd.Series:
    years = pd.to_numeric(df["release_year"], errors="coerce")
    return (years > year).fillna(False).astype(bool)


# 1
def content_type_counts(df: pd.DataFrame, today: date) -> pd.DataFrame:
    return _counts_frame(group_count(df, "kind"), "kind", "total_content")


# 2
def most_common_rating(df: pd.DataFrame, today: date) -> pd.DataFrame:
    ranked = top_n_per_partition(df, "kind", "rating", 1)
    rows = [(kind, entries[0][0]) for kind, entries in ranked.items() if entries]
    return pd.DataFrame(rows, columns=["kind", "most_common_rating"])


# 3
def movies_by_year(df: pd.DataFrame, today: date, year: int = 2020) -> pd.DataFrame:
    years = pd.to_numeric(df["release_year"], errors="coerce")
    mask = (df["kind"] == MOVIE) & (years == year).fillna(False).astype(bool)
    return df.loc[mask, ["title"]].reset_index(drop=True)


# 4
def top_countries(df: pd.DataFrame, today: date, top_n: int = 5) -> pd.DataFrame:
    exploded = explode_frame(df, "countries", token_column="country")
    counts = group_count(exploded, "country", sort_desc=True, top_n=top_n)
    return _counts_frame(counts, "country", "total_content")


# 5
def longest_movie(df: pd.DataFrame, today: date) -> pd.DataFrame:
    movies = df[df["kind"] == MOVIE]
    movies = movies.assign(minutes=duration_amount(movies))
    longest = longest_by_metric(movies, "minutes")
    return pd.DataFrame({
        "title": longest["title"].tolist(),
        "minutes": longest["minutes"].astype("int64").tolist(),
    }, columns=["title", "minutes"])


# 6
def recent_content(df: pd.DataFrame, today: date, years: int = 5) -> pd.DataFrame:
    added = date_added_series(df)
    cutoff = pd.Timestamp(today) - pd.DateOffset(years=years)
    mask = added.notna() & (added >= cutoff)
    return _records(df, mask)


# 7
def by_director(df: pd.DataFrame, today: date, name: str = "Rajiv Chilaka") -> pd.DataFrame:
    return _records(df, contains_text(df, "director", name))


# 8
def long_series(df: pd.DataFrame, today: date, min_seasons: int = 5) -> pd.DataFrame:
    seasons = duration_amount(df)
    mask = (df["kind"] == SERIES) & (seasons > min_seasons)
    return df.loc[mask, ["title", "duration"]].reset_index(drop=True)


# 9
def genre_counts(df: pd.DataFrame, today: date) -> pd.DataFrame:
    exploded = explode_frame(df, "genres", token_column="genre")
    return _counts_frame(group_count(exploded, "genre"), "genre", "total_content")


# 10
def country_year_share(df: pd.DataFrame, today: date, country: str = "India", top_n: int = 5) -> pd.DataFrame:
    """Anteil (in %) der Titel eines Landes pro Jahr von date_added, Top-N Jahre."""
    exploded = explode_frame(df, "countries", token_column="country")
    in_country = exploded[exploded["country"].str.casefold() == country.strip().casefold()]
    in_country = in_country.assign(year=date_added_series(in_country).dt.year.astype("Int64"))

    # Nenner: alle Einträge des Landes, auch ohne parsebares Datum
    shares = percentage_by_group(in_country, "year")
    shares = shares.sort_values(ascending=False, kind="stable").head(max(int(top_n), 0))
    return pd.DataFrame({
        "year": [int(y) for y in shares.index],
        "percentage": shares.to_numpy(dtype="float64"),
    }, columns=["year", "percentage"])


# 11
def documentaries(df: pd.DataFrame, today: date, genre: str = "Documentaries") -> pd.DataFrame:
    mask = (df["kind"] == MOVIE) & contains_text(df, "genres", genre)
    return _records(df, mask)


# 12
def missing_director(df: pd.DataFrame, today: date) -> pd.DataFrame:
    return _records(df, df["director"].isna())


# 13
def actor_recent(df: pd.DataFrame, today: date, name: str = "Salman Khan", years: int = 10) -> pd.DataFrame:
    mask = (
        (df["kind"] == MOVIE)
        & contains_text(df, "cast", name)
        & _release_year_after(df, today.year - years)
    )
    return _records(df, mask)


# 14
def top_actors_in_country(df: pd.DataFrame, today: date, country: str = "India", top_n: int = 10) -> pd.DataFrame:
    produced_in = df[has_token(df, "countries", country)]
    exploded = explode_frame(produced_in, "cast", token_column="actor")
    counts = group_count(exploded, "actor", sort_desc=True, top_n=top_n)
    return _counts_frame(counts, "actor", "appearances")


# 15
def categorize_by_keywords(
    df: pd.DataFrame,
    today: date,
    keywords: Sequence[str] | str = ("kill", "violence"),
) -> pd.DataFrame:
    if isinstance(keywords, str):
        keywords = split_tokens(keywords)

    flagged = pd.Series(False, index=df.index)
    for word in keywords:
        flagged |= contains_text(df, "description", word)
    # fehlende Beschreibung -> 'Good' (wie CASE ... ELSE)
    categories = pd.Series(np.where(flagged, "Bad", "Good"), index=df.index)
    return _counts_frame(group_count(df, lambda _: categories), "category", "total_content")
