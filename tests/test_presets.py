import pytest
from pydantic import ValidationError

from rate_curve import (
    CurveModel,
    RangeOrderCurves,
    build_order_curves,
    builtin_presets,
    load_presets,
    preset_curve,
)


def test_builtin_presets_cover_both_sides():
    presets = builtin_presets()
    assert set(presets) == {'lend', 'borrow'}
    for side in presets.values():
        assert set(side) == {'classic', 'aggressive', 'caution'}


def test_preset_percentages_are_share_of_max():
    curve = preset_curve('lend', 'classic')
    assert curve.side == 'lend'
    assert curve.amounts == [0, 900000, 3400000, 3900000]
    assert curve.points[1].percentage == pytest.approx(23.08, abs=0.01)
    assert curve.points[-1].percentage == 100


def test_preset_curve_returns_independent_copy():
    first = preset_curve('borrow', 'aggressive')
    edited = CurveModel().move_point(first, 1, new_apr=60)
    second = preset_curve('borrow', 'aggressive')

    assert edited.points[1].apr == 60
    assert second.points[1].apr == 15


def test_preset_curve_rejects_unknown_names():
    with pytest.raises(ValueError, match="Unknown lend strategy 'custom'"):
        preset_curve('lend', 'custom')
    with pytest.raises(ValueError, match="No presets for side"):
        preset_curve('sideways', 'classic')


def test_build_two_way_order():
    order = build_order_curves('both', 'caution')
    assert order.lend.points[0].apr == 35
    assert order.borrow.points[0].apr == 45
    assert len(order.curves) == 2

    lend_only = build_order_curves('lend', 'classic')
    assert lend_only.borrow is None
    assert [c.side for c in lend_only.curves] == ['lend']


def test_range_order_curves_validates_sides():
    lend = preset_curve('lend', 'classic')
    with pytest.raises(ValidationError):
        RangeOrderCurves(tab='both', lend=lend)
    with pytest.raises(ValidationError):
        RangeOrderCurves(tab='borrow', borrow=lend)


def test_load_presets_from_yaml(tmp_path):
    path = tmp_path / "presets.yaml"
    path.write_text(
        "lend:\n"
        "  steady:\n"
        "    - {amount: 2000000, apr: 12}\n"
        "    - {amount: 0, apr: 20}\n"
        "borrow:\n"
        "  steady:\n"
        "    - {amount: 0, apr: 8}\n"
    )

    presets = load_presets(path)
    curve = preset_curve('lend', 'steady', presets)
    assert curve.amounts == [0, 2000000]
    assert curve.points[1].percentage == 100
    assert preset_curve('borrow', 'steady', presets).points[0].percentage == 0


def test_load_presets_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_presets(tmp_path / "missing.yaml")

    bad_side = tmp_path / "bad_side.yaml"
    bad_side.write_text("both:\n  x:\n    - {amount: 0, apr: 1}\n")
    with pytest.raises(ValueError, match="Unknown curve side"):
        load_presets(bad_side)

    bad_knot = tmp_path / "bad_knot.yaml"
    bad_knot.write_text("lend:\n  x:\n    - {amount: 0}\n")
    with pytest.raises(ValueError, match="Invalid knots"):
        load_presets(bad_knot)

    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert load_presets(empty) == {}
