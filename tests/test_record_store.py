"""
Tests for the in-memory record store
"""
import pandas as pd
import pytest

from catalog_pipeline.store.record_store import MediaRecord, RecordStore


class TestLoad:
    def test_load_keeps_order_and_normalizes_kind(self, store):
        records = list(store.scan())
        assert [r.identifier for r in records][:3] == ["s1", "s2", "s3"]
        assert records[1].kind == "Series"
        assert len(store) == 10

    def test_load_replaces_snapshot(self, store, sample_records):
        store.load(sample_records[:2])
        assert [r.identifier for r in store.scan()] == ["s1", "s2"]

    def test_duplicate_identifier_keeps_first(self, sample_records):
        dup = dict(sample_records[0], title="Other title")
        store = RecordStore(sample_records + [dup])
        assert len(store) == 10
        first = next(store.filter(lambda r: r.identifier == "s1"))
        assert first.title == "Dick Johnson Is Dead"
        assert store.rejected["reason"].tolist() == ["duplicate identifier"]

    def test_unknown_kind_is_rejected(self, sample_records):
        bad = dict(sample_records[0], identifier="x1", kind="Podcast")
        store = RecordStore(sample_records + [bad])
        assert len(store) == 10
        assert store.rejected["identifier"].tolist() == ["x1"]

    def test_invalid_row_does_not_shadow_valid_duplicate(self):
        store = RecordStore([
            {"identifier": "x", "kind": "Podcast", "title": "bad"},
            {"identifier": "x", "kind": "Movie", "title": "good"},
        ])
        assert [r.title for r in store.scan()] == ["good"]
        assert store.rejected["reason"].tolist() == ["invalid record"]

    def test_load_from_media_records_and_frame(self, sample_frame):
        records = [MediaRecord(identifier="a", kind="Movie", title="A", duration="90 min")]
        assert len(RecordStore(records)) == 1
        assert len(RecordStore(sample_frame)) == 10

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            RecordStore([("s1", "Movie")])

    def test_empty(self):
        store = RecordStore([])
        assert store.is_empty()
        assert list(store.scan()) == []


class TestScan:
    def test_scan_is_restartable(self, store):
        first = [r.identifier for r in store.scan()]
        second = [r.identifier for r in store.scan()]
        assert first == second

    def test_scan_survives_reload(self, store, sample_records):
        it = store.scan()
        next(it)
        store.load(sample_records[:1])
        # started scan still reads the old snapshot
        assert len(list(it)) == 9

    def test_absent_director_distinct_from_empty(self, store):
        by_id = {r.identifier: r for r in store.scan()}
        assert by_id["s2"].director is None
        assert by_id["s10"].director == ""

    def test_release_year_is_int(self, store):
        record = next(store.scan())
        assert record.release_year == 2020
        assert isinstance(record.release_year, int)

    def test_filter(self, store):
        movies = list(store.filter(lambda r: r.kind == "Movie"))
        assert [r.identifier for r in movies] == ["s1", "s4", "s5", "s8", "s9", "s10"]


def test_frame_is_a_copy(store):
    frame = store.frame()
    frame.loc[0, "title"] = "changed"
    assert store.frame().loc[0, "title"] == "Dick Johnson Is Dead"
    assert isinstance(frame, pd.DataFrame)
