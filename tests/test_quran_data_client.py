import pytest
import responses

from quran_tracker.errors import DataSourceFetchFailed
from quran_tracker.quran_data_client import QuranDataClient

BASE_URL = "https://example.org/quran"


def test_fetch_local_file(data_dir):
    client = QuranDataClient(source=str(data_dir))
    data = client.fetch_json("quran.json")
    assert data["112"]["english"] == "Al-Ikhlas"


def test_fetch_local_missing_file(data_dir):
    client = QuranDataClient(source=str(data_dir))
    with pytest.raises(DataSourceFetchFailed) as excinfo:
        client.fetch_json("translation-ms.json")
    assert excinfo.value.resource == "translation-ms.json"


def test_fetch_local_invalid_json(data_dir):
    (data_dir / "broken.json").write_text("{", encoding="utf-8")
    with pytest.raises(DataSourceFetchFailed):
        QuranDataClient(source=str(data_dir)).fetch_json("broken.json")


def test_fetch_remote_json():
    client = QuranDataClient(source=BASE_URL + "/")
    with responses.RequestsMock() as mock:
        mock.add(responses.GET, f"{BASE_URL}/translation-en.json", json={"1": {"ayahs": {"1": "x"}}}, status=200)
        data = client.fetch_json("translation-en.json")
        assert len(mock.calls) == 1
    assert data == {"1": {"ayahs": {"1": "x"}}}


def test_fetch_remote_http_error():
    client = QuranDataClient(source=BASE_URL)
    with responses.RequestsMock() as mock:
        mock.add(responses.GET, f"{BASE_URL}/translation-ur.json", status=404)
        with pytest.raises(DataSourceFetchFailed):
            client.fetch_json("translation-ur.json")


def test_fetch_remote_invalid_json():
    client = QuranDataClient(source=BASE_URL)
    with responses.RequestsMock() as mock:
        mock.add(responses.GET, f"{BASE_URL}/quran.json", body="<html>", status=200)
        with pytest.raises(DataSourceFetchFailed):
            client.fetch_json("quran.json")


def test_fetch_remote_connection_error():
    client = QuranDataClient(source=BASE_URL)
    with responses.RequestsMock():
        # No registered URL: responses raises ConnectionError
        with pytest.raises(DataSourceFetchFailed):
            client.fetch_json("quran.json")


def test_fetch_many_skips_failures(data_dir):
    client = QuranDataClient(source=str(data_dir))
    results = client.fetch_many(["translation-en.json", "translation-id.json"], show_progress=False)
    assert set(results) == {"translation-en.json"}
