from vaal_water import data_manager, pipeline


def test_dataset_is_loaded_once(monkeypatch):
    calls = []

    def fake_run_pipeline(*, source):
        calls.append(source)
        return pipeline.Dataset()

    monkeypatch.setattr(pipeline, "run_pipeline", fake_run_pipeline)

    first = data_manager.load_dataset("/srv/data")
    second = data_manager.load_dataset("/srv/data")

    assert first is second
    assert calls == ["/srv/data"]


def test_force_reload_recomputes(monkeypatch):
    calls = []

    def fake_run_pipeline(*, source):
        calls.append(source)
        return pipeline.Dataset()

    monkeypatch.setattr(pipeline, "run_pipeline", fake_run_pipeline)

    data_manager.load_dataset("/srv/data")
    data_manager.load_dataset("/srv/data", force_reload=True)

    assert calls == ["/srv/data", "/srv/data"]


def test_empty_source_logs_warning(tmp_path, caplog):
    dataset = data_manager.load_dataset(str(tmp_path))

    assert len(dataset) == 0
    assert "No samples loaded" in caplog.text
