"""
Shared fixtures: a small catalog covering the awkward rows of the real export
(missing director vs. empty string, duration in the rating column, unparsable
dates, delimiter-only country field, tied maxima).
"""
from datetime import date

import pandas as pd
import pytest

from catalog_pipeline.reports.catalog import ReportCatalog
from catalog_pipeline.store.record_store import RecordStore

REFERENCE_DATE = date(2024, 6, 1)


def _rec(identifier, kind, title, director, cast, countries, date_added,
         release_year, rating, duration, genres, description):
    return {
        "identifier": identifier, "kind": kind, "title": title,
        "director": director, "cast": cast, "countries": countries,
        "date_added": date_added, "release_year": release_year,
        "rating": rating, "duration": duration, "genres": genres,
        "description": description,
    }


SAMPLE_RECORDS = [
    _rec("s1", "Movie", "Dick Johnson Is Dead", "Kirsten Johnson", None,
         "United States", "September 25, 2021", 2020, "PG-13", "90 min",
         "Documentaries", "As her father nears the end of his life, a filmmaker stages his death."),
    _rec("s2", "TV Show", "Blood & Water", None, "Ama Qamata, Khosi Ngema",
         "South Africa", "September 24, 2021", 2021, "TV-MA", "2 Seasons",
         "International TV Shows, TV Dramas, TV Mysteries",
         "After crossing paths at a party, a Cape Town teen sets out to prove a theory."),
    _rec("s3", "TV Show", "Ganglands", "Julien Leclercq", "Sami Bouajila, Tracy Gotoas",
         None, "September 24, 2021", 2021, "TV-MA", "1 Season",
         "Crime TV Shows, International TV Shows, TV Action & Adventure",
         "To protect his family, skilled thief Mehdi and his team are pulled into a turf war."),
    _rec("s4", "Movie", "Chhota Bheem", "Rajiv Chilaka", "Vatsal Dubey, Julie Tejwani",
         "India", "July 22, 2021", 2013, "TV-Y7", "64 min",
         "Children & Family Movies", "Bheem and his friends set off on an adventure."),
    _rec("s5", "Movie", "Bharat", "Ali Abbas Zafar", "Salman Khan, Katrina Kaif",
         "India, United States", "June 1, 2019", 2019, "TV-14", "155 min",
         "Dramas, International Movies", "A man keeps a promise he made to his father."),
    _rec("s6", "TV Show", "Breaking Bad", None, "Bryan Cranston, Aaron Paul",
         "United States", "August 2, 2013", 2013, "TV-MA", "5 Seasons",
         "Crime TV Shows, TV Dramas", "A chemistry teacher slides into a world of VIOLENCE."),
    _rec("s7", "TV Show", "Grey's Anatomy", None, "Ellen Pompeo",
         "United States", " August 1, 2020", 2020, "TV-14", "17 Seasons",
         "Romantic TV Shows, TV Dramas", "Interns and doctors navigate life at a hospital."),
    _rec("s8", "Movie", "Louis C.K. 2017", "Louis C.K.", "Louis C.K.",
         "United States", "April 4, 2017", 2017, "74 min", None,
         "Movies", "The comedian muses on religion and marriage."),
    _rec("s9", "Movie", "Sultan", "Ali Abbas Zafar", "Salman Khan, Anushka Sharma",
         "India", "not a date", 2016, "TV-14", "155 min",
         "Dramas, International Movies, Sports Movies", "A wrestler fights his way back."),
    _rec("s10", "Movie", "Krishna", "", "Vatsal Dubey",
         ", ", None, 2010, "TV-Y7", "70 min",
         "Children & Family Movies", None),
]


@pytest.fixture
def sample_records():
    return [dict(r) for r in SAMPLE_RECORDS]


@pytest.fixture
def sample_frame(sample_records):
    return pd.DataFrame(sample_records)


@pytest.fixture
def store(sample_records):
    return RecordStore(sample_records)


@pytest.fixture
def catalog(store):
    return ReportCatalog(store, reference_date=REFERENCE_DATE)


@pytest.fixture
def raw_csv(tmp_path):
    """The sample catalog in the raw export layout (show_id, type, country, listed_in)."""
    raw = pd.DataFrame(SAMPLE_RECORDS).rename(columns={
        "identifier": "show_id", "kind": "type",
        "countries": "country", "genres": "listed_in",
    })
    raw = raw[["show_id", "type", "title", "director", "cast", "country", "date_added",
               "release_year", "rating", "duration", "listed_in", "description"]]
    path = tmp_path / "netflix_titles.csv"
    raw.to_csv(path, index=False)
    return path
