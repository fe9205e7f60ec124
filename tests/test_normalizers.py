import statistics

import pytest

from cabernet.normalizers import Standard


def test_fit_transform_standardises():
    result = Standard().fit_transform([2.0, 4.0, 6.0, 8.0])
    assert statistics.fmean(result) == pytest.approx(0.0, abs=1e-12)
    assert statistics.pstdev(result) == pytest.approx(1.0)


def test_symmetric_values():
    result = Standard().fit_transform([1.0, 3.0])
    assert result == pytest.approx([-1.0, 1.0])


def test_inverse_round_trip():
    normalizer = Standard()
    values = [0.5, -3.0, 10.0, 2.25]
    transformed = normalizer.fit_transform(values)
    assert normalizer.inverse_transform(transformed) == pytest.approx(values)


def test_transform_uses_fitted_parameters():
    normalizer = Standard()
    normalizer.fit([1.0, 3.0])
    assert normalizer.mean == pytest.approx(2.0)
    assert normalizer.transform([2.0]) == pytest.approx([0.0])


def test_transform_before_fit_raises():
    with pytest.raises(RuntimeError):
        Standard().transform([1.0])


def test_constant_features_raise():
    with pytest.raises(ValueError):
        Standard().fit([5.0, 5.0, 5.0])


def test_empty_features_raise():
    with pytest.raises(ValueError):
        Standard().fit([])