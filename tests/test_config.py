import json
import logging

import pytest
from pydantic import ValidationError

from range_config import (
    AppLogger,
    CurveBounds,
    StructuredFormatter,
    configure_root_logger,
    get_config,
    load_config,
    set_current_session,
)
from rate_curve import CurveModel
from vault_allocation import AllocationNormalizer


def test_defaults_without_loading():
    config = get_config()
    assert config.curve.bounds.min_gap == 1000
    assert (config.curve.bounds.min_apr, config.curve.bounds.max_apr) == (1, 70)
    assert config.curve.sample_steps == 100
    assert config.allocation.derive_allocated_value is True


def test_load_config_feeds_components(tmp_path, lend_curve):
    path = tmp_path / "config.yaml"
    path.write_text(
        "curve:\n"
        "  bounds:\n"
        "    min_gap: 10000\n"
        "  sample_steps: 20\n"
        "allocation:\n"
        "  derive_allocated_value: false\n"
        "logging:\n"
        "  format: json\n"
    )

    config = load_config(path)
    assert get_config() is config

    model = CurveModel()
    assert model.move_point(lend_curve, 1, new_amount=0).points[1].amount == 10000
    assert len(model.sample(lend_curve)) == 21
    assert AllocationNormalizer().config.derive_allocated_value is False


def test_load_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")

    invalid = tmp_path / "invalid.yaml"
    invalid.write_text("curve:\n  sample_steps: 1\n")
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(invalid)

    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert load_config(empty).curve.min_zoom == 0.5


def test_curve_bounds_require_ordered_apr_range():
    with pytest.raises(ValidationError):
        CurveBounds(min_apr=50, max_apr=10)
    with pytest.raises(ValidationError):
        CurveBounds(min_gap=0)


def _record(**extra):
    record = logging.LogRecord('rate_curve.curve', logging.INFO, __file__, 1, 'moved %s', ('point',), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_text():
    line = StructuredFormatter('text').format(_record(session_id='s-1'))
    assert line.endswith("rate_curve.curve - INFO - moved point [session_id=s-1]")


def test_structured_formatter_json_includes_extras():
    payload = json.loads(StructuredFormatter('json').format(_record(session_id='s-2', curve_side='lend')))
    assert payload['message'] == 'moved point'
    assert payload['session_id'] == 's-2'
    assert payload['curve_side'] == 'lend'
    assert payload['level'] == 'INFO'


def test_app_logger_attaches_session(caplog):
    app_logger = AppLogger('range_config.test')
    with caplog.at_level(logging.INFO, logger='range_config.test'):
        app_logger.log_info("without session")
        set_current_session('edit-42')
        app_logger.log_info("with session")

    first, second = caplog.records
    assert not hasattr(first, 'session_id')
    assert second.session_id == 'edit-42'


def test_configure_root_logger_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_root_logger()
        configure_root_logger()
        structured = [h for h in root.handlers if isinstance(h.formatter, StructuredFormatter)]
        assert len(structured) == 1
        assert root.level == logging.INFO
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
