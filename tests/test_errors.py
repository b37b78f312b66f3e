from rlt.errors import ConfigError, WorkerSetupError


def test_config_error_keeps_message():
    err = ConfigError("rate must be non-zero")
    assert str(err) == "rate must be non-zero"


def test_config_error_is_value_error():
    err = ConfigError("stats window periods must be non-empty")
    assert isinstance(err, ValueError)
    assert str(err) == "stats window periods must be non-empty"


def test_worker_setup_error_carries_worker_and_source():
    source = OSError("connection refused")
    err = WorkerSetupError(3, source)
    assert err.worker_id == 3
    assert err.source is source
    assert err.__cause__ is source


def test_worker_setup_error_message_mentions_worker_and_cause():
    err = WorkerSetupError(7, RuntimeError("boom"))
    text = str(err)
    assert "7" in text
    assert "boom" in text


def test_worker_setup_error_is_runtime_error():
    source = KeyError("missing")
    err = WorkerSetupError(0, source)
    assert isinstance(err, RuntimeError)
    assert err.worker_id == 0
    assert err.source is source