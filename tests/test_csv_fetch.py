import logging

import pytest
import requests

from vaal_water import csv_fetch
from vaal_water.csv_fetch import fetch_all_years, fetch_year_csv, year_location


class FakeResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


@pytest.fixture
def fake_get(monkeypatch):
    calls = []
    responses = {}

    def _get(url, timeout=None):
        calls.append((url, timeout))
        return responses.get(url, FakeResponse(status_code=404))

    monkeypatch.setattr(csv_fetch.requests, "get", _get)
    return calls, responses


def test_year_location_for_directory_and_url(tmp_path):
    assert year_location(2013, str(tmp_path)) == str(tmp_path / "2013.csv")
    assert year_location(2013, "https://example.org/data/") == "https://example.org/data/2013.csv"


def test_fetch_local_file(tmp_path):
    (tmp_path / "2011.csv").write_text("Sample ID,pH\nKB,7.1\n", encoding="utf-8")

    assert fetch_year_csv(2011, str(tmp_path)) == "Sample ID,pH\nKB,7.1\n"


def test_fetch_local_file_strips_bom(tmp_path):
    (tmp_path / "2011.csv").write_bytes("\ufeffSample ID\nKB\n".encode("utf-8"))

    assert fetch_year_csv(2011, str(tmp_path)).startswith("Sample ID")


def test_fetch_url_uses_timeout(fake_get):
    calls, responses = fake_get
    responses["https://example.org/data/2011.csv"] = FakeResponse("Sample ID\nKB\n")

    text = fetch_year_csv(2011, "https://example.org/data", timeout=3.0)

    assert text == "Sample ID\nKB\n"
    assert calls == [("https://example.org/data/2011.csv", 3.0)]


def test_fetch_url_error_status_raises(fake_get):
    with pytest.raises(requests.HTTPError):
        fetch_year_csv(2011, "https://example.org/data")


def test_fetch_all_years_skips_failures(fake_get, caplog):
    _, responses = fake_get
    responses["https://example.org/2012.csv"] = FakeResponse("a\n1\n")

    with caplog.at_level(logging.WARNING, logger="vaal_water.csv_fetch"):
        texts = fetch_all_years([2011, 2012, 2013], source="https://example.org")

    assert texts == {2012: "a\n1\n"}
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "2011, 2013" in errors[0].getMessage()


def test_fetch_all_years_missing_local_files(tmp_path):
    (tmp_path / "2014.csv").write_text("a\n1\n", encoding="utf-8")

    texts = fetch_all_years([2013, 2014], source=str(tmp_path))

    assert list(texts) == [2014]


def test_fetch_all_years_keeps_order_and_custom_fetch():
    seen = []

    def fetch(year):
        seen.append(year)
        if year == 2016:
            raise OSError("disk gone")
        return str(year)

    texts = fetch_all_years([2015, 2016, 2017], fetch=fetch)

    assert seen == [2015, 2016, 2017]
    assert list(texts.items()) == [(2015, "2015"), (2017, "2017")]


def test_unexpected_errors_propagate():
    def fetch(year):
        raise RuntimeError("bug")

    with pytest.raises(RuntimeError):
        fetch_all_years([2011], fetch=fetch)
