import numpy as np
import pytest

from voronoisphere.sampling import sample_points_on_sphere


def test_sample_points_on_sphere_unit():
    rng = np.random.default_rng(0)
    pts = sample_points_on_sphere(500, rng)
    assert pts.shape == (500, 3)
    assert np.allclose(np.linalg.norm(pts, axis=1), 1.0, atol=1e-12)


def test_sample_points_roughly_uniform():
    rng = np.random.default_rng(1)
    pts = sample_points_on_sphere(20000, rng)
    # mean of a uniform sphere sample is the origin
    assert np.all(np.abs(pts.mean(axis=0)) < 0.05)


def test_sampling_is_deterministic_with_seed():
    a = sample_points_on_sphere(20, np.random.default_rng(999))
    b = sample_points_on_sphere(20, np.random.default_rng(999))
    assert np.allclose(a, b)


def test_sampling_zero_and_negative():
    rng = np.random.default_rng(0)
    assert sample_points_on_sphere(0, rng).shape == (0, 3)
    with pytest.raises(ValueError):
        sample_points_on_sphere(-1, rng)
