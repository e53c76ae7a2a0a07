import json
import logging

from density_reduction.utils.logging import JSONFormatter, get_logger


def test_json_formatter_includes_context_fields():
    record = logging.LogRecord("density_reduction.test", logging.INFO, __file__, 1, "reduced %s", ("x",), None)
    record.component = "approx"
    record.group = ("A", "w1")
    record.unrelated = "dropped"
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "reduced x"
    assert payload["level"] == "INFO"
    assert payload["component"] == "approx"
    assert payload["group"] == ["A", "w1"]
    assert "unrelated" not in payload
    assert payload["timestamp"].endswith("Z")


def test_get_logger_adds_component(caplog):
    log = get_logger("density_reduction.test_component", component="unit")
    with caplog.at_level(logging.INFO):
        log.info("hello")
    assert caplog.records[-1].component == "unit"


def test_json_formatter_keeps_preflight_and_io_fields():
    record = logging.LogRecord("density_reduction.test", logging.WARNING, __file__, 1, "policy", (), None)
    record.policy = "quantile"
    record.estimated_gb = 0.25
    record.dropped = 3
    record.sources = {"grid_step": "cli"}
    record.cpu_seconds = 0.5
    payload = json.loads(JSONFormatter().format(record))
    assert payload["policy"] == "quantile"
    assert payload["estimated_gb"] == 0.25
    assert payload["dropped"] == 3
    assert payload["sources"] == {"grid_step": "cli"}
    assert payload["cpu_seconds"] == 0.5
