from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

import pandas as pd

from catalog_pipeline.reports import queries
from catalog_pipeline.utils.basic_validator import RECORD_COLUMNS


@dataclass(frozen=True)
class ReportSpec:
    id: str
    purpose: str
    columns: List[str]
    runner: Callable[..., pd.DataFrame]
    defaults: Dict[str, Any] = field(default_factory=dict)
    # Ergebnis ist eine Schlüssel->Anzahl-Tabelle (für Balkendiagramme)
    chartable: bool = False


REPORTS: Dict[str, ReportSpec] = {
    "content-type-counts": ReportSpec(
        id="content-type-counts",
        purpose="Number of movies vs. series",
        columns=["kind", "total_content"],
        runner=queries.content_type_counts,
        chartable=True,
    ),
    "most-common-rating": ReportSpec(
        id="most-common-rating",
        purpose="Most common rating per content kind",
        columns=["kind", "most_common_rating"],
        runner=queries.most_common_rating,
    ),
    "movies-by-year": ReportSpec(
        id="movies-by-year",
        purpose="Titles of all movies released in a given year",
        columns=["title"],
        runner=queries.movies_by_year,
        defaults={"year": 2020},
    ),
    "top-countries": ReportSpec(
        id="top-countries",
        purpose="Countries with the most content",
        columns=["country", "total_content"],
        runner=queries.top_countries,
        defaults={"top_n": 5},
        chartable=True,
    ),
    "longest-movie": ReportSpec(
        id="longest-movie",
        purpose="Longest movie(s) by runtime in minutes",
        columns=["title", "minutes"],
        runner=queries.longest_movie,
    ),
    "recent-content": ReportSpec(
        id="recent-content",
        purpose="Content added in the last N years",
        columns=RECORD_COLUMNS,
        runner=queries.recent_content,
        defaults={"years": 5},
    ),
    "by-director": ReportSpec(
        id="by-director",
        purpose="All content by a director (substring, case-insensitive)",
        columns=RECORD_COLUMNS,
        runner=queries.by_director,
        defaults={"name": "Rajiv Chilaka"},
    ),
    "long-series": ReportSpec(
        id="long-series",
        purpose="Series with more than N seasons",
        columns=["title", "duration"],
        runner=queries.long_series,
        defaults={"min_seasons": 5},
    ),
    "genre-counts": ReportSpec(
        id="genre-counts",
        purpose="Number of titles per genre",
        columns=["genre", "total_content"],
        runner=queries.genre_counts,
        chartable=True,
    ),
    "india-year-share": ReportSpec(
        id="india-year-share",
        purpose="Share of a country's titles per year added (top years)",
        columns=["year", "percentage"],
        runner=queries.country_year_share,
        defaults={"country": "India", "top_n": 5},
        chartable=True,
    ),
    "documentaries": ReportSpec(
        id="documentaries",
        purpose="Movies listed as documentaries",
        columns=RECORD_COLUMNS,
        runner=queries.documentaries,
        defaults={"genre": "Documentaries"},
    ),
    "missing-director": ReportSpec(
        id="missing-director",
        purpose="Content without a director",
        columns=RECORD_COLUMNS,
        runner=queries.missing_director,
    ),
    "actor-recent": ReportSpec(
        id="actor-recent",
        purpose="Movies with an actor released in the last N years",
        columns=RECORD_COLUMNS,
        runner=queries.actor_recent,
        defaults={"name": "Salman Khan", "years": 10},
    ),
    "top-actors-in-country": ReportSpec(
        id="top-actors-in-country",
        purpose="Actors with the most appearances in a country's content",
        columns=["actor", "appearances"],
        runner=queries.top_actors_in_country,
        defaults={"country": "India", "top_n": 10},
        chartable=True,
    ),
    "categorize-by-keywords": ReportSpec(
        id="categorize-by-keywords",
        purpose="Good/Bad split by violent keywords in the description",
        columns=["category", "total_content"],
        runner=queries.categorize_by_keywords,
        defaults={"keywords": ["kill", "violence"]},
        chartable=True,
    ),
}
